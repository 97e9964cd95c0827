import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from plagcheck.access.signing import sign_document_access
from plagcheck.config.settings import Settings
from plagcheck.extraction.exceptions import TextExtractionError
from plagcheck.extraction.factory import TextExtractorFactory
from plagcheck.logging.logger import Log
from plagcheck.processor.exceptions import ProcessorError
from plagcheck.processor.models import UploadRequest
from plagcheck.processor.processor import Engine, build_engine
from plagcheck.storage.exceptions import DocumentNotFoundError, StorageError
from plagcheck.storage.models import DOCUMENT_STATUSES, StoredDocument

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_NOT_FOUND = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plagcheck",
        description="Near-duplicate detection for submitted papers.",
    )
    parser.add_argument("--data-dir", type=Path, help="Override the corpus directory.")
    sub = parser.add_subparsers(dest="command", required=True)

    upload = sub.add_parser("upload", help="Add a file to the corpus.")
    upload.add_argument("file", type=Path)
    upload.add_argument("--title", help="Defaults to the file name.")
    upload.add_argument("--author")
    upload.add_argument("--category")
    upload.add_argument("--status", choices=DOCUMENT_STATUSES, default="draft")
    upload.add_argument("--user-id")
    upload.add_argument("--institution")

    check = sub.add_parser("check", help="Score a file against the corpus.")
    check.add_argument("file", type=Path)
    check.add_argument("--category", help="Category to search; 'all' searches everything.")
    check.add_argument("--institution")
    check.add_argument("--top-k", type=int)

    show = sub.add_parser("show", help="Print a stored document's metadata.")
    show.add_argument("id", type=int)

    delete = sub.add_parser("delete", help="Remove a document, its original and report.")
    delete.add_argument("id", type=int)

    status = sub.add_parser("status", help="Change a document's status.")
    status.add_argument("id", type=int)
    status.add_argument("status", choices=DOCUMENT_STATUSES)

    sub.add_parser("categories", help="List corpus partitions with labels.")

    link = sub.add_parser("link", help="Print a signed access token for a document.")
    link.add_argument("id", type=int)
    link.add_argument("--kind", choices=("report", "original"), default="report")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> logging -> engine -> run one command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)
    engine = build_engine(settings, data_dir=args.data_dir)

    try:
        return _dispatch(args, engine, settings)
    except (ProcessorError, TextExtractionError, ValueError) as exc:
        Log.error(f"Rejected: {exc}", command=args.command)
        return EXIT_INVALID_INPUT
    except DocumentNotFoundError as exc:
        Log.error(str(exc), command=args.command)
        return EXIT_NOT_FOUND
    except (StorageError, OSError) as exc:
        Log.error(f"Storage failure: {exc}", command=args.command)
        return EXIT_FAILURE


def _dispatch(args: argparse.Namespace, engine: Engine, settings: Settings) -> int:
    if args.command == "upload":
        text = _extract(args.file, settings)
        document = engine.uploader.upload(
            UploadRequest(
                file_bytes=args.file.read_bytes(),
                original_filename=args.file.name,
                title=args.title or args.file.stem,
                content=text,
                category=args.category,
                status=args.status,
                user_id=args.user_id,
                institution=args.institution,
                author=args.author,
            )
        )
        _print(_summary(document))
    elif args.command == "check":
        result = engine.checker.check(
            _extract(args.file, settings),
            category=args.category,
            institution=args.institution,
            top_k=settings.default_top_k if args.top_k is None else args.top_k,
        )
        _print(asdict(result))
    elif args.command == "show":
        _print(_summary(engine.corpus.get_by_id(args.id)))
    elif args.command == "delete":
        engine.corpus.get_by_id(args.id)
        engine.reports.delete(args.id)
        engine.corpus.delete(args.id)
        _print({"deleted": args.id})
    elif args.command == "status":
        _print(_summary(engine.corpus.update_status(args.id, args.status)))
    elif args.command == "categories":
        _print(
            [
                {"category": name, "label": engine.document_types.label(name)}
                for name in engine.corpus.list_categories()
            ]
        )
    elif args.command == "link":
        engine.corpus.get_by_id(args.id)
        _print(
            {
                "id": args.id,
                "kind": args.kind,
                "sig": sign_document_access(args.kind, args.id, settings.report_access_secret),
            }
        )
    return EXIT_OK


def _extract(path: Path, settings: Settings) -> str:
    extractor = TextExtractorFactory.for_filename(path.name, settings)
    return extractor.extract(path.read_bytes())


def _summary(document: StoredDocument) -> dict[str, object]:
    record = document.to_record()
    del record["content"]
    del record["minhash_signature"]
    return record


def _print(payload: object) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    sys.exit(main())
