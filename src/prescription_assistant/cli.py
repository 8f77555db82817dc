# ============================================================================
# src/prescription_assistant/cli.py
# ============================================================================
"""
Command-line driver.

Usage:
    prescription-assistant scan rx.jpg
    prescription-assistant scan rx.jpg --json
    prescription-assistant chat rx.jpg

Backends come from the environment / .env (see prescription_assistant.config)
and can be overridden with --ocr-backend / --llm-backend.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .config import logging_settings
from .core.constants import DISCLAIMER
from .core.conversation import ConversationSession
from .core.models import ImagePayload
from .core.pipeline import ProcessingPipeline
from .core.state import ProcessingState
from .extractors import create_text_extractor
from .services import create_prescription_service
from .utils.exceptions import PrescriptionAssistantError
from .utils.logging import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prescription-assistant",
        description="Read a prescription photo, explain it and answer questions about it"
    )
    parser.add_argument(
        "--ocr-backend",
        choices=["tesseract", "google_vision", "remote"],
        help="Override OCR_BACKEND"
    )
    parser.add_argument(
        "--llm-backend",
        choices=["openai", "ollama", "mock"],
        help="Override LLM_BACKEND"
    )
    parser.add_argument(
        "--log-level",
        help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Process an image and print the result")
    scan.add_argument("image", type=Path, help="Prescription image")
    scan.add_argument("--json", action="store_true", help="Print the prescription as JSON")

    chat = subparsers.add_parser("chat", help="Process an image, then ask questions about it")
    chat.add_argument("image", type=Path, help="Prescription image")

    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    config: Dict[str, Any] = {}
    if args.ocr_backend:
        config["ocr_backend"] = args.ocr_backend
    if args.llm_backend:
        config["llm_backend"] = args.llm_backend
    return config


def _print_progress(state: ProcessingState) -> None:
    if state.is_processing:
        print(state.progress_message, file=sys.stderr)


def _load_image(path: Path) -> Optional[ImagePayload]:
    if not path.is_file():
        print(f"Error: {path} does not exist", file=sys.stderr)
        return None
    try:
        return ImagePayload.from_path(path)
    except PrescriptionAssistantError as e:
        print(f"Error: {e.user_message}", file=sys.stderr)
        return None


def _print_prescription(prescription) -> None:
    print("Extracted Text")
    print("-" * 60)
    print(prescription.extracted_text)
    print()
    print("Explanation")
    print("-" * 60)
    print(prescription.explanation)
    print()
    print("Medications")
    print("-" * 60)
    for medication in prescription.medications:
        print(f"- {medication.name}: {medication.dosage}, {medication.frequency}")
    print()
    print(DISCLAIMER)


async def _process(args: argparse.Namespace) -> Tuple[Optional[ProcessingState], Any, Any]:
    config = _overrides(args)
    extractor = create_text_extractor(config)
    service = create_prescription_service(config)

    image = _load_image(args.image)
    if image is None:
        return None, extractor, service

    pipeline = ProcessingPipeline(extractor, service)
    pipeline.subscribe(_print_progress)
    state = await pipeline.run(image)
    return state, extractor, service


async def _close(*resources) -> None:
    for resource in resources:
        close = getattr(resource, "close", None)
        if close is not None:
            await close()


async def _scan(args: argparse.Namespace) -> int:
    state, extractor, service = await _process(args)
    try:
        if state is None:
            return 1
        if state.has_failed:
            print(f"Error: {state.user_message}", file=sys.stderr)
            return 1

        if args.json:
            print(json.dumps(state.prescription.to_dict(), indent=2))
        else:
            _print_prescription(state.prescription)
        return 0
    finally:
        await _close(extractor, service)


async def _chat(args: argparse.Namespace) -> int:
    state, extractor, service = await _process(args)
    try:
        if state is None:
            return 1
        if state.has_failed:
            print(f"Error: {state.user_message}", file=sys.stderr)
            return 1

        _print_prescription(state.prescription)
        session = ConversationSession(state.prescription, service)
        print()
        print(session.messages[0].content)
        print("(/clear to start over, /quit to exit)")

        while True:
            try:
                question = await asyncio.to_thread(input, "\nYou: ")
            except EOFError:
                break

            command = question.strip().lower()
            if command == "/quit":
                break
            if command == "/clear":
                session.clear()
                print(session.messages[0].content)
                continue

            if not await session.submit(question):
                continue
            if session.error_message:
                print(session.error_message, file=sys.stderr)
                session.dismiss_error()
            else:
                print(f"\nAssistant: {session.messages[-1].content}")
        return 0
    finally:
        await _close(extractor, service)


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=args.log_level or logging_settings.LOG_LEVEL,
        log_file=logging_settings.LOG_FILE,
        format_json=logging_settings.LOG_JSON,
    )

    try:
        if args.command == "scan":
            return asyncio.run(_scan(args))
        return asyncio.run(_chat(args))
    except PrescriptionAssistantError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
