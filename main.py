"""
Ludo Lounge - launcher
Starts the pass-and-play board in a local Gradio server.
"""

import argparse
import sys

from loguru import logger

from ludo_lounge.config import config


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play Ludo on one screen.")
    parser.add_argument(
        "--save-path",
        default=config.SAVE_PATH,
        help="JSON file the game is saved to after every turn",
    )
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=7860)
    parser.add_argument("--share", action="store_true", help="Create a public Gradio link")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    from ludo_gr.app import launch_app

    logger.info(f"Saving games to {args.save_path}")
    demo = launch_app(save_path=args.save_path)
    demo.launch(server_name=args.host, server_port=args.port, share=args.share)


if __name__ == "__main__":
    main()
