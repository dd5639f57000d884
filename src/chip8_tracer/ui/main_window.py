# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。

CHIP-8コアのホストとして、QTimerでクロックを刻み、1フレームごとに
advance() を cycles_per_frame 回、advance_timers() を1回呼び出します。
コアの操作は全てGUIスレッド上で行います。
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget, QTabWidget, QToolBar, QFileDialog, QMessageBox
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QTimer, Slot

from chip8_tracer.common.errors import Chip8Error
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.models import MachineConfig
from chip8_tracer.debugger.debugger import Debugger
from .display_view import DisplayView
from .register_view import RegisterView
from .code_view import CodeView
from .keymap import to_pad_key

logger = logging.getLogger(__name__)

# @intent:responsibility アプリケーションのメインウィンドウを定義し、エミュレータの実行を駆動します。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[MachineConfig] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("CHIP-8 Tracer")
        self.setFocusPolicy(Qt.StrongFocus)

        self._config = config or MachineConfig()
        self._rom: Optional[bytes] = None
        self._tone_playing = False

        self.display_view = DisplayView()
        self.setCentralWidget(self.display_view)
        self._create_inspector()
        self._create_toolbar()
        self._create_menus()

        self._frame_timer = QTimer(self)
        self._frame_timer.timeout.connect(self._run_frame)

        self._setup_backend(self._config)
        self._update_ui_state(False)

    # @intent:responsibility 構成に基づいてCPUとデバッガを生成し、ビューに接続します。
    def _setup_backend(self, config: MachineConfig) -> None:
        self._config = config
        self.cpu, self.bus = SystemBuilder().build_system(config)
        self.cpu.add_tone_listener(self._on_tone_end)
        self.debugger = Debugger(self.cpu)
        self._frame_timer.setInterval(max(1, round(1000 / config.timer_hz)))

        self.display_view.set_framebuffer(self.cpu.get_framebuffer())
        self.register_view.set_cpu(self.cpu)
        self._refresh_views()

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_rom_action = QAction("Open ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._open_rom_dialog)
        file_menu.addAction(self.load_rom_action)

        self.load_config_action = QAction("Load Machine Config...", self)
        self.load_config_action.triggered.connect(self._load_config_dialog)
        file_menu.addAction(self.load_config_action)

    def _create_toolbar(self):
        toolbar = QToolBar("Execution")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self.stop)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self.step)
        toolbar.addAction(self.step_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self.reset_machine)
        toolbar.addAction(self.reset_action)

    def _create_inspector(self):
        inspector_dock = QDockWidget("Inspector", self)
        inspector_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        tabs = QTabWidget()
        self.register_view = RegisterView()
        tabs.addTab(self.register_view, "Registers")
        self.code_view = CodeView()
        tabs.addTab(self.code_view, "Code")
        inspector_dock.setWidget(tabs)
        self.addDockWidget(Qt.RightDockWidgetArea, inspector_dock)

    def _update_ui_state(self, is_running: bool):
        self.load_rom_action.setEnabled(not is_running)
        self.load_config_action.setEnabled(not is_running)
        self.run_action.setEnabled(not is_running)
        self.step_action.setEnabled(not is_running)
        self.stop_action.setEnabled(is_running)

    def is_running(self) -> bool:
        return self._frame_timer.isActive()

    # --- ROM / Config ---

    # @intent:responsibility ROMイメージをリセット済みのマシンにロードします。
    def load_rom(self, data: bytes) -> None:
        self.stop()
        self.cpu.reset()
        self.cpu.load_rom(data)
        self._rom = bytes(data)
        self.debugger.clear_history()
        self.code_view.reset_cache()
        self._refresh_views()
        logger.info("Loaded ROM of %d bytes", len(data))

    def load_rom_file(self, path: str) -> None:
        with open(path, "rb") as f:
            self.load_rom(f.read())
        self.statusBar().showMessage(f"Loaded {path}")

    @Slot()
    def _open_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            try:
                self.load_rom_file(file_name)
            except (OSError, Chip8Error) as e:
                QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")

    @Slot()
    def _load_config_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Machine Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if file_name:
            try:
                self._setup_backend(ConfigLoader().load_from_file(file_name))
                if self._rom is not None:
                    self.cpu.load_rom(self._rom)
                self.statusBar().showMessage(f"Loaded machine config from {file_name}")
            except (OSError, ValueError, Chip8Error) as e:
                QMessageBox.critical(self, "Error", f"Failed to load machine config: {e}")

    # --- Execution control ---

    @Slot()
    def start(self):
        self._update_ui_state(True)
        self.statusBar().showMessage("Running...")
        self._frame_timer.start()

    @Slot()
    def stop(self):
        self._frame_timer.stop()
        self._set_tone(False)
        self._update_ui_state(False)

    @Slot()
    def step(self):
        try:
            self.debugger.step_instruction()
        except Chip8Error as e:
            self._report_fault(e)
        self._refresh_views()

    @Slot()
    def reset_machine(self):
        self.stop()
        self.cpu.reset()
        if self._rom is not None:
            self.cpu.load_rom(self._rom)
        self.debugger.clear_history()
        self._refresh_views()
        self.statusBar().showMessage("Reset")

    # @intent:responsibility 1フレーム分の命令とタイマーを進め、表示を更新します。
    @Slot()
    def _run_frame(self):
        self.debugger.run(max_steps=self._config.cycles_per_frame)
        error = self.debugger.get_last_error()
        if error is not None:
            self.stop()
            self._report_fault(error)
            self._refresh_views()
            return

        # ティック前に判定する。ST=1で設定されたトーンもこのフレームで鳴らす
        sounding = self.cpu.is_tone_active()
        self.cpu.advance_timers()
        self._set_tone(sounding)
        self.display_view.update()
        self.register_view.update_registers()

    def _report_fault(self, error: Chip8Error) -> None:
        logger.error("CHIP-8 fault: %s", error)
        self.statusBar().showMessage(f"Stopped: {error}")

    def _refresh_views(self) -> None:
        self.display_view.update()
        self.register_view.update_registers()
        self.code_view.update_code(self.cpu, self.cpu.get_state().pc)

    # --- Sound ---

    def _set_tone(self, active: bool) -> None:
        if active and not self._tone_playing:
            QApplication.beep()
        self._tone_playing = active

    def _on_tone_end(self) -> None:
        logger.debug("Sound timer expired")

    # --- Keypad ---

    def keyPressEvent(self, event: QKeyEvent):
        pad = to_pad_key(event.key())
        if pad is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        self.cpu.set_key(pad, True)

    def keyReleaseEvent(self, event: QKeyEvent):
        pad = to_pad_key(event.key())
        if pad is None or event.isAutoRepeat():
            super().keyReleaseEvent(event)
            return
        self.cpu.set_key(pad, False)

    def closeEvent(self, event: QCloseEvent):
        self.stop()
        event.accept()
