# src/chip8_tracer/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
アプリケーションを初期化し、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_tracer.config.loader import ConfigLoader
from .main_window import MainWindow

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 interpreter and tracer")
    parser.add_argument("rom", nargs="?", help="CHIP-8 ROM image to load")
    parser.add_argument("--config", help="machine config (YAML)")
    parser.add_argument("--run", action="store_true", help="start running immediately")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    config = ConfigLoader().load_from_file(args.config) if args.config else None

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(config)
    if args.rom:
        main_win.load_rom_file(args.rom)
        if args.run:
            main_win.start()
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
