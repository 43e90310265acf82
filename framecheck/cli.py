"""
Command-line interface for framecheck.

Commands:
- templates: List the technique templates being watched
- replay: Feed a recorded event log through the matchers and print scores
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .config import ProfileError, TrainerProfile
from .debug.trace import Tracer, setup_logging
from .input.event_log import EventLogError, load_event_log
from .patterns.template import TemplateError
from .report import format_report, format_template
from .session import TrainerSession

log = logging.getLogger(__name__)


def get_arg_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="framecheck",
        description="Recognize controller input techniques and score their frame timing",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--profile",
        type=str,
        default="configs/trainer.toml",
        help="Path to trainer profile (built-in templates are used if missing)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Templates command
    templates_parser = subparsers.add_parser(
        "templates",
        help="List technique templates",
    )
    templates_parser.add_argument(
        "--name",
        type=str,
        help="Only show templates with this name",
    )

    # Replay command
    replay_parser = subparsers.add_parser(
        "replay",
        help="Replay a recorded event log",
    )
    replay_parser.add_argument(
        "log",
        type=str,
        help="Event log (.json or .csv)",
    )
    replay_parser.add_argument(
        "--template",
        type=str,
        help="Only watch templates with this name",
    )
    replay_parser.add_argument(
        "--save-trace",
        type=str,
        help="Save event trace to file",
    )

    return parser


def load_profile(path: str | Path) -> TrainerProfile:
    """Load the trainer profile, falling back to defaults when the file is absent."""
    path = Path(path)
    if not path.exists():
        log.debug("Profile %s not found, using built-in templates", path)
        return TrainerProfile()
    return TrainerProfile.from_toml(path)


def configure_logging(args: argparse.Namespace, profile: TrainerProfile) -> None:
    """Apply the profile's log level and file; --verbose forces DEBUG."""
    level = logging.DEBUG if args.verbose else getattr(logging, profile.debug.log_level)
    setup_logging(level, profile.debug.log_file or None)


def cmd_templates(args: argparse.Namespace) -> int:
    """Run templates command."""
    profile = load_profile(args.profile)
    configure_logging(args, profile)
    templates = profile.build_templates()
    if args.name:
        templates = [t for t in templates if t.name == args.name]
        if not templates:
            print(f"No template named {args.name!r}")
            return 1

    for template in templates:
        for line in format_template(template, profile.timing.frame_rate):
            print(line)
    print(f"\n{len(templates)} template(s)")
    return 0


def cmd_replay(args: argparse.Namespace) -> int:
    """Run replay command."""
    profile = load_profile(args.profile)
    configure_logging(args, profile)

    templates = profile.build_templates()
    if args.template:
        templates = [t for t in templates if t.name == args.template]
        if not templates:
            print(f"No template named {args.template!r}")
            return 1

    events = load_event_log(args.log)
    trace_path = args.save_trace or profile.debug.trace_path
    tracer = Tracer(enabled=bool(trace_path))
    tracer.start()

    session = TrainerSession(templates, profile.timing, tracer=tracer)
    print(f"Replaying {len(events)} events against {len(templates)} template(s)...")

    completed = 0
    for event in events:
        for score in session.feed(event.action, event.timestamp):
            completed += 1
            print(f"\n[{event.timestamp:.3f}s] {score.template_name}")
            for line in format_report(score, profile.timing.frame_rate):
                print(f"  {line}")

    print(f"\n{completed} attempt(s) completed")

    if trace_path:
        tracer.save(trace_path)
        print(f"Trace saved to {trace_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = get_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "templates": cmd_templates,
        "replay": cmd_replay,
    }

    cmd_func = commands.get(args.command)
    if cmd_func is None:
        print(f"Unknown command: {args.command}")
        return 1

    try:
        return cmd_func(args)
    except (OSError, ValidationError, ProfileError, TemplateError, EventLogError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
