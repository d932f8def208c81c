"""Command-line interface."""

import asyncio

from hookbridge.cli.arg_parser import parse_args


def main(argv: list[str] | None = None) -> None:
    """Entry point for the HookBridge CLI."""
    args = parse_args(argv)

    from hookbridge.cli.serve import run_bot, run_check, run_register

    try:
        if args.command == "run":
            exit_code = asyncio.run(run_bot(
                config_path=args.config,
                register=args.register,
                verbose=args.verbose,
                log_dir=args.log_dir,
            ))
        elif args.command == "register":
            exit_code = asyncio.run(run_register(args.config))
        elif args.command == "check":
            exit_code = run_check(args.config)
        else:
            print("Usage: hookbridge <command>")
            print("Commands: run, register, check")
            exit_code = 1
    except KeyboardInterrupt:
        exit_code = 0
    raise SystemExit(exit_code)


__all__ = ["main"]
