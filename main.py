#!/usr/bin/env python3

import argparse
import sys

from kps.core.renderer import RendererConfig
from kps.core.input_system import KeyConfigLoader
from kps.core.move_source import RandomMoveSource, ScriptedMoveSource, parse_move_script
from kps.game.game import Game


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="KPS Fighter: kick, punch, sweep, crouch, block or jump your way to victory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                          # Interactive terminal game
  python main.py --seed 7                 # Reproducible opponent
  python main.py --renderer simple --script kpsjcb
        """
    )
    parser.add_argument(
        "--renderer",
        choices=["terminal", "simple"],
        default="terminal",
        help="Interactive raw terminal or plain scripted output"
    )
    parser.add_argument(
        "--script",
        default="",
        help="Keys to feed the simple renderer, one per tick (e.g. 'kkpsb')"
    )
    parser.add_argument(
        "--opponent-script",
        help="Fixed opponent moves as move codes (k p s c b j), looped"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the random opponent"
    )
    parser.add_argument(
        "--keys",
        help="Path to a key mappings YAML file"
    )
    parser.add_argument(
        "--save-log",
        metavar="PATH",
        help="Write the full game log to PATH when the game ends"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = RendererConfig(
        width=80,
        height=24,
        title="KPS Fighter",
        target_fps=30
    )

    try:
        if args.opponent_script:
            move_source = ScriptedMoveSource(parse_move_script(args.opponent_script), loop=True)
        else:
            move_source = RandomMoveSource(seed=args.seed)

        key_config = None
        if args.keys:
            key_config = KeyConfigLoader(config_path=args.keys)
            key_config.load_config()
            for warning in key_config.warnings:
                print(f"Warning: {warning}", file=sys.stderr)

        if args.renderer == "simple":
            from kps.renderers.simple_renderer import SimpleRenderer
            renderer = SimpleRenderer(config, script=args.script)
        else:
            from kps.renderers.terminal_renderer import TerminalRenderer
            renderer = TerminalRenderer(config, show_log=args.debug)

        game = Game(renderer, move_source=move_source, key_config=key_config,
                    fps=config.target_fps, debug=args.debug, save_log=args.save_log)
        game.run()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
    except Exception as e:
        print(f"Application error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
