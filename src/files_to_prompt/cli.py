# src/files_to_prompt/cli.py
import sys
import argparse
from typing import List, Optional, TextIO

# Module imports
from files_to_prompt.config import Configuration, OutputFormat
from files_to_prompt.core.pipeline import files_to_prompt
from files_to_prompt.errors import OutputError

def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="files-to-prompt",
        description="Concatenate a directory full of files into a single prompt for use with LLMs.",
    )
    parser.add_argument("paths", nargs="*", help="Paths to files or directories")
    parser.add_argument(
        "-e", "--extension",
        action="append",
        default=[],
        help="File extension to include (repeatable)",
    )
    parser.add_argument("--include-hidden", action="store_true", help="Include files and folders starting with .")
    parser.add_argument("--ignore-files-only", action="store_true", help="--ignore option only ignores files")
    parser.add_argument("--ignore-gitignore", action="store_true", help="Ignore .gitignore files and include all files")
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Pattern to ignore (repeatable)",
    )
    parser.add_argument("-o", "--output", type=str, default=None, help="Output to a file instead of stdout")

    # Only one output format may be chosen
    fmt = parser.add_mutually_exclusive_group()
    fmt.add_argument("-c", "--cxml", action="store_true", help="Output in XML-ish format suitable for Claude's long context window")
    fmt.add_argument("-m", "--markdown", action="store_true", help="Output Markdown with fenced code blocks")

    parser.add_argument("-n", "--line-numbers", action="store_true", help="Add line numbers to the output")
    parser.add_argument("-0", "--null", action="store_true", help="Use NUL character as separator when reading from stdin")
    return parser

def read_paths_from_stdin(stream: Optional[TextIO], null_separated: bool = False) -> List[str]:
    """Reads extra paths piped on stdin. An interactive terminal contributes none."""
    if stream is None or stream.isatty():
        return []
    content = stream.read()
    if null_separated:
        return [p for p in content.split("\0") if p]
    return content.split()

def build_configuration(args: argparse.Namespace) -> Configuration:
    if args.cxml:
        output_format = OutputFormat.CLAUDE_XML
    elif args.markdown:
        output_format = OutputFormat.MARKDOWN
    else:
        output_format = OutputFormat.PLAIN

    return Configuration(
        extensions=frozenset(args.extension),
        include_hidden=args.include_hidden,
        ignore_patterns=tuple(args.ignore),
        ignore_files_only=args.ignore_files_only,
        ignore_gitignore=args.ignore_gitignore,
        format=output_format,
        line_numbers=args.line_numbers,
    )

def main():
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args()

        paths = list(args.paths) + read_paths_from_stdin(sys.stdin, args.null)
        config = build_configuration(args)

        # 2. Render to the chosen sink
        if args.output:
            try:
                sink = open(args.output, "w", encoding="utf-8")
            except OSError as e:
                raise OutputError(f"Could not open '{args.output}': {e}") from e
            try:
                with sink:
                    files_to_prompt(paths, config, sink)
            except OSError as e:
                # Raised by flush/close of the output file
                raise OutputError(f"Could not write '{args.output}': {e}") from e
        else:
            files_to_prompt(paths, config, sys.stdout)

    except OutputError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
