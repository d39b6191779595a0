"""Stormdefs CLI: definition folder conversion commands."""

import argparse
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional

DEFAULT_INPUT_PATH = "C:\\Program Files (x86)\\Steam\\steamapps\\common\\Stormworks\\rom\\data\\definitions"
# Answering the output prompt with this value writes next to the input files
DEFAULT_OUTPUT_CHOICE = "Definitions folder"


def _prompt(message: str, default: str) -> str:
    """Ask for a value on stdin; an empty answer takes the default."""
    answer = input(f"{message} ({default}) ").strip()
    return answer or default


def _resolve_folders(input_arg: Optional[Path], output_arg: Optional[Path]) -> tuple[Path, Path]:
    """Fill in folders not given as flags by asking for them."""
    if input_arg is not None:
        input_path = input_arg
    else:
        input_path = Path(_prompt("Stormworks definitions folder path:", DEFAULT_INPUT_PATH))

    if output_arg is not None:
        output_path = output_arg
    else:
        answer = _prompt("Output folder path:", DEFAULT_OUTPUT_CHOICE)
        output_path = input_path if answer == DEFAULT_OUTPUT_CHOICE else Path(answer)

    return input_path, output_path


def main():
    """Main CLI entry point for stormdefs commands."""
    # Get version for --version argument (handle PackageNotFoundError)
    try:
        stormdefs_version = get_version("stormdefs")
    except PackageNotFoundError:
        stormdefs_version = "dev"

    parser = argparse.ArgumentParser(
        prog="stormdefs",
        description="Stormdefs: convert Stormworks definition XML files into one JSON document"
    )
    parser.add_argument("--version", action="version", version=f"stormdefs {stormdefs_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # convert command
    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a definitions folder into output.json",
        parents=[parent_parser]
    )
    convert_parser.add_argument(
        "--input",
        dest="input_dir",
        type=Path,
        default=None,
        help="Definitions folder (prompted for when omitted)"
    )
    convert_parser.add_argument(
        "--output",
        dest="output_dir",
        type=Path,
        default=None,
        help="Folder that receives output.json (prompted for when omitted)"
    )
    convert_parser.add_argument(
        "--schema",
        choices=["minimal", "extended"],
        default="extended",
        help="Record schema: minimal (metadata and tags) or extended (adds geometry blocks)"
    )
    convert_parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip files that fail to parse instead of aborting the whole run"
    )

    argv = sys.argv[1:]
    # Without a sub-command, run convert (prompting for the folders)
    if not argv or (argv[0].startswith("-") and argv[0] not in ("-h", "--help", "--version")):
        argv = ["convert"] + argv
    args = parser.parse_args(argv)

    if args.command == "convert":
        # Lazy import: only import the kernel when a conversion is requested
        from .api import convert_directory, write_document
        from .kernel.definition import SCHEMAS

        try:
            input_dir, output_dir = _resolve_folders(args.input_dir, args.output_dir)

            if not input_dir.is_dir():
                print("Error: The input path provided is not a valid folder path!", file=sys.stderr)
                sys.exit(1)
            if not output_dir.is_dir():
                print("Error: The destination path provided is not a valid folder path!", file=sys.stderr)
                sys.exit(1)

            result = convert_directory(
                input_dir.resolve(),
                schema=SCHEMAS[args.schema],
                on_malformed="skip" if args.skip_invalid else "abort",
            )
            out_path = write_document(result, output_dir.resolve())

            for issue in result.issues:
                print(f"Warning: skipped {issue.path} ({issue.code.value}): {issue.message}", file=sys.stderr)

            if not args.quiet:
                print("[OK] Conversion complete")
                print(f"  Output: {out_path}")
                print(f"  Schema: {result.schema_name}")
                print(f"  Definitions: {len(result.definitions)}")
                print(f"  Skipped: {len(result.issues)}")
            sys.exit(0)
        except (EOFError, KeyboardInterrupt):
            print("Error: Aborted.", file=sys.stderr)
            sys.exit(1)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
