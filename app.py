#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import logging

from core.scheduler import TkScheduler
from services.registry import InstanceRegistry
from services.sound_service import SoundPlayer
from ui.main_window import MAX_KEYS, PreviewWindow


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Single-button work/break interval timer preview")
    parser.add_argument("--keys", type=int, default=3, help=f"number of keys to show (1-{MAX_KEYS})")
    parser.add_argument("--work", type=int, default=25, help="work minutes")
    parser.add_argument("--break", dest="break_minutes", type=int, default=5, help="break minutes")
    parser.add_argument("--cycles", type=int, default=4, help="cycles per round (1-4)")
    parser.add_argument("--sound", action="store_true", help="play a sound when a phase completes")
    parser.add_argument(
        "--text-title",
        action="store_true",
        help="send the countdown as the key title instead of drawing it in the image",
    )
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, ...")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    window = PreviewWindow(
        keys=args.keys,
        work_minutes=args.work,
        break_minutes=args.break_minutes,
        cycles=args.cycles,
        sound=args.sound,
    )
    registry = InstanceRegistry(
        sink=window,
        scheduler=TkScheduler(window.root),
        sound=SoundPlayer(),
        in_image_numeral=not args.text_title,
    )
    window.attach(registry)
    window.run()


if __name__ == "__main__":
    main()
