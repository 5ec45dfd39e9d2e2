"""
Company Document Validator
Command line entry point: validates a VAT or registration certificate against
company data entered during onboarding
"""
import argparse
import logging
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from models import DocumentType, ExpectedCompanyData
from services.document_service import DocumentValidationService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate a company document against expected company data"
    )
    parser.add_argument("file", type=Path, help="PDF or image of the document")
    parser.add_argument(
        "--type",
        dest="document_type",
        choices=[t.value for t in DocumentType],
        required=True,
        help="Document type",
    )
    parser.add_argument(
        "--expected",
        type=Path,
        help="JSON file with the expected company data (camelCase or snake_case keys)",
    )
    parser.add_argument(
        "--mime-type",
        help="MIME type of the file (guessed from the file name if omitted)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    mime_type = args.mime_type or mimetypes.guess_type(args.file.name)[0]
    if not mime_type:
        parser.error(f"Cannot guess MIME type of {args.file}, pass --mime-type")

    try:
        content = args.file.read_bytes()
    except OSError as e:
        parser.error(f"Cannot read {args.file}: {e}")

    expected = ExpectedCompanyData()
    if args.expected:
        try:
            expected = ExpectedCompanyData.model_validate_json(args.expected.read_text())
        except (OSError, ValidationError) as e:
            parser.error(f"Invalid expected data in {args.expected}: {e}")

    logger.info(f"Processing file: {args.file.name} ({mime_type})")

    service = DocumentValidationService()
    result = service.validate_document(content, mime_type, DocumentType(args.document_type), expected)

    print(result.model_dump_json(by_alias=True, indent=2))
    return 0 if result.is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
