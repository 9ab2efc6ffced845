#!/usr/bin/env python3
"""Issue or verify a certificate from the command line.

Useful with --offline to inspect the rendered PDF without touching the bucket:

    python scripts/issue_certificate.py issue u1 "Ada Lovelace" A --offline
    python scripts/issue_certificate.py verify u1
"""

import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.services.certificate_service import CertificateService
from app.services.record_store import CertificateRecordStore
from app.services.storage_service import StorageService, get_storage_service


def build_storage(offline: bool, output_dir: str) -> StorageService:
    if not offline:
        return get_storage_service()
    return StorageService(
        bucket=settings.AWS_BUCKET_NAME,
        public_url_base=settings.AWS_URL_FILE,
        offline=True,
        local_root=output_dir,
    )


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)

    issue = sub.add_parser("issue", help="Issue (or re-issue) a certificate")
    issue.add_argument("id")
    issue.add_argument("name")
    issue.add_argument("grade")
    issue.add_argument(
        "--offline",
        action="store_true",
        default=settings.IS_OFFLINE,
        help="Write the PDF to disk instead of uploading it",
    )
    issue.add_argument("--output-dir", default=settings.OFFLINE_OUTPUT_DIR)

    verify = sub.add_parser("verify", help="Verify a certificate id")
    verify.add_argument("id")

    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if args.command == "issue":
            storage = build_storage(args.offline, args.output_dir)
        else:
            storage = get_storage_service()
        service = CertificateService(
            store=CertificateRecordStore(db),
            storage=storage,
            base_url=settings.AWS_URL_FILE,
        )

        if args.command == "issue":
            result = service.issue(args.id, args.name, args.grade)
            print(json.dumps({"message": result.message, "url": result.url}, indent=2))
            if args.offline:
                print(f"PDF written to {Path(args.output_dir).resolve() / (args.id + '.pdf')}")
            return 0

        result = service.verify(args.id)
        print(json.dumps(result.__dict__, indent=2))
        return 0 if result.valid else 1
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
