"""Command-line entry point: summarize a PDF, then ask questions about it."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Callable, List, Optional

from docqa.clients.document_assistant_client import create_document_assistant_client
from docqa.config.configuration import ConfigurationError, configure_logging, get_config
from docqa.exceptions import DocQAError
from docqa.models.document import SourceFile
from docqa.services.document_session import DocumentSession

EXIT_COMMANDS = {"exit", "quit"}


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize a PDF and chat about it")
    parser.add_argument("pdf", type=Path, help="Path to the PDF file.")
    parser.add_argument(
        "--mime-type",
        type=str,
        default=None,
        help="MIME type of the file (guessed from the extension by default).",
    )
    return parser.parse_args(argv)


async def chat_loop(
    session: DocumentSession,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Answer questions from read_line until EOF or an exit command."""
    while True:
        try:
            question = await asyncio.to_thread(read_line, "\nQuestion> ")
        except EOFError:
            break

        if question.strip().lower() in EXIT_COMMANDS:
            break

        try:
            answer = await session.ask(question)
        except DocQAError as e:
            write(f"Error: {e.user_message}")
            continue

        write(f"\nAnswer: {answer}")


async def run(
    source_file: SourceFile,
    session: DocumentSession,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Load the document into the session and start the chat loop."""
    try:
        state = await session.submit_file(source_file)
    except DocQAError as e:
        write(f"Error: {e.user_message}")
        return 1

    write(f"Summary of {source_file.name}:\n\n{state.summary}")
    await chat_loop(session, read_line, write)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging(config.logging)

    client = create_document_assistant_client()
    session = DocumentSession(summarizer=client, answerer=client)
    source_file = SourceFile.from_path(args.pdf, mime_type=args.mime_type)
    return asyncio.run(run(source_file, session))


if __name__ == "__main__":
    sys.exit(main())
