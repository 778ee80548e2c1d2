"""CLI entry point for the Rune interpreter.

Usage:
    python -m rune [-v|-vv|-vvv|-vvvv] [--show-ast] <program_file>
    python -m rune [-v...] --emit-ast <program_file>
    python -m rune [-v...] --ast <ast_json_file>
    python -m rune [-v...] [--repl]

Options:
  -v            Increase debug verbosity (can be repeated)
  --show-ast    Print the parsed module before the resulting scope
  --emit-ast    Parse the given .rn file and emit an AST JSON file
  --ast         Evaluate a previously emitted AST JSON file
  --repl        Start the interactive interpreter (default without a file)

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Tokenize and parse errors are printed in
their structured form and nothing is evaluated.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, ast_from_obj
from .errors import RuneError
from .interpreter import Interpreter
from .parser import parse_source
from .shell import Shell


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def show_ast(module) -> None:
    # dataclass repr recurses once per nesting level
    try:
        text = repr(module)
    except RecursionError:
        print("Error: AST is nested too deeply to print", file=sys.stderr)
        return
    print(text)


def evaluate(module, debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        scope = interpreter.run(module)
    finally:
        interpreter.close()
    print(repr(scope))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Rune language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--show-ast', action='store_true', help='print the parsed module before evaluating it')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='RUNE_FILE', help='emit AST JSON for the given .rn file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='evaluate AST from a JSON file')
    group.add_argument('--repl', action='store_true', help='start the interactive interpreter')
    parser.add_argument('program', nargs='?', help='Rune program file (.rn) to evaluate')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            module = parse_source(source)
        except RuneError as e:
            print(repr(e))
            sys.exit(1)
        try:
            text = json.dumps(ast_to_obj(module), ensure_ascii=False, indent=2)
        except RecursionError:
            print(f"Error: AST of {program_file} is nested too deeply to serialize", file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            out.write(text)
        print(str(out_path))
        return

    # Evaluate from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        try:
            with open(ast_path, 'r', encoding='utf-8') as f:
                module = ast_from_obj(json.load(f))
        except (TypeError, ValueError, KeyError, RecursionError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        if args.show_ast:
            show_ast(module)
        evaluate(module, args.v)
        return

    # Interactive mode
    if args.repl or not args.program:
        interpreter = Interpreter(debug_level=args.v)
        try:
            Shell(interpreter).cmdloop()
        finally:
            interpreter.close()
        return

    # Default: evaluate source file
    source = read_source(Path(args.program))
    try:
        module = parse_source(source)
    except RuneError as e:
        print(repr(e))
        sys.exit(1)
    if args.show_ast:
        show_ast(module)
    evaluate(module, args.v)


if __name__ == '__main__':
    main()
