from __future__ import annotations
import argparse, json, sys
from . import config as CFG
from .engine import Engine
from .errors import DictionaryError
from .rng import SystemRandomSource

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Parrot chat CLI (learns from what you type)")
    p.add_argument("--dict", default=CFG.DICTIONARY_PATH, help="Dictionary JSON path (created if missing)")
    p.add_argument("--learn-file", nargs="+", default=[], help="Text files to learn line by line")
    p.add_argument("--q", default=None, help="Single line to answer once")
    p.add_argument("--repl", action="store_true", help="Interactive chat loop")
    p.add_argument("--rebuild", action="store_true", help="Force a full index rebuild after load")
    p.add_argument("--no-learn", action="store_true", help="Answer without learning")
    p.add_argument("--seed", type=int, default=CFG.RANDOM_SEED, help="Random seed for responses")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    eng = Engine(rng=SystemRandomSource(args.seed), learn=not args.no_learn)
    try:
        eng.load(args.dict, rebuild=True if args.rebuild else None, verbose=args.verbose)
    except DictionaryError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    def emit(line: str, reply: str | None):
        if args.json:
            print(json.dumps({"line": line, "response": reply}, ensure_ascii=False))
        else:
            print(reply if reply is not None else "(no response)")

    try:
        for path in args.learn_file:
            n = eng.learn_file(path)
            if not args.json:
                print(f"[learned] {path}: {n:,} lines")

        if args.q:
            emit(args.q, eng.process(args.q))

        if args.repl:
            print("Say something (empty line to exit).  Commands: :save, :stats, :rebuild")
            while True:
                try:
                    line = input("> ")
                except (EOFError, KeyboardInterrupt):
                    print(); break
                cmd = line.strip().lower()
                if not cmd:
                    break
                if cmd == ":save":
                    eng.save(); print("(saved)"); continue
                if cmd == ":stats":
                    print(json.dumps(eng.stats())); continue
                if cmd == ":rebuild":
                    eng.rebuild(); print("(index rebuilt)"); continue
                emit(line, eng.process(line))
        return 0
    except (DictionaryError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        try:
            eng.shutdown()
        except DictionaryError as e:
            print(f"error: {e}", file=sys.stderr)

if __name__ == "__main__":
    raise SystemExit(main())
