"""
Color Editor UI - Main application window and interface
"""

from PyQt5.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                             QGridLayout, QLabel, QPushButton, QColorDialog,
                             QScrollArea, QFileDialog, QMessageBox, QSplitter,
                             QCheckBox, QApplication)
from PyQt5.QtGui import QPixmap, QImage, QColor
from PyQt5.QtCore import Qt, QTimer

from colorcode.codec import gameshark_format, swatch_png
from colorcode.core.errors import FormatError
from colorcode.core.material_skinner import describe_material
from colorcode.core.palette import (FIELDS, SLOT_LABELS, SLOT_NAMES, Palette,
                                    feel_lucky_rounds, randomize_palette)
from colorcode.core.preview_renderer import PreviewRenderer
from colorcode.utils.color_utils import (color_brightness, from_channels,
                                         parse_color_from_clipboard, to_channels,
                                         to_hex_text)
from colorcode.utils.logging_config import get_logger
from colorcode.utils.settings import SettingsManager
from .zoomable_label import ZoomableLabel


logger = get_logger(__name__)

LUCKY_TICK_MS = 50
PREVIEW_COLUMNS = ('primary', 'ambient', 'lit')


def color_to_qcolor(color):
    """Convert a packed color to QColor"""
    return QColor(*to_channels(color))


def qcolor_to_color(qcolor):
    """Convert QColor to a packed color"""
    return from_channels(qcolor.red(), qcolor.green(), qcolor.blue())


def pil_to_qpixmap(image):
    """Convert an RGBA PIL image to QPixmap"""
    image_bytes = image.tobytes('raw', 'RGBA')
    qimage = QImage(image_bytes, image.width, image.height, image.width * 4, QImage.Format_RGBA8888)
    # QImage does not own image_bytes, copy before it goes away
    return QPixmap.fromImage(qimage.copy())


class ColorEditor(QMainWindow):
    """Main color editor application window"""

    def __init__(self, settings_manager=None):
        super().__init__()

        self.settings_manager = settings_manager or SettingsManager()
        self.settings_manager.load_settings()

        self.palette = Palette.default()
        self.renderer = PreviewRenderer(emissive_intensity=self.settings_manager.get('emissive_intensity'))
        self.renderer.show_grid = self.settings_manager.get('show_grid')

        self.color_buttons = {}

        # History for undo/redo, whole-palette snapshots
        self.undo_history = []
        self.redo_history = []
        self.max_undo_history = 50

        # I Feel Lucky animation
        self.lucky_timer = QTimer(self)
        self.lucky_timer.timeout.connect(self._lucky_tick)
        self.lucky_rounds_left = 0

        self.initUI()
        self.refresh()

    def initUI(self):
        """Initialize the user interface"""
        self.setWindowTitle('PyColorCode - Character Color Editor')
        self.setGeometry(100, 100, 900, 600)

        self.create_menu_bar()

        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_splitter = QSplitter(Qt.Horizontal)
        central_layout = QVBoxLayout(central_widget)
        central_layout.addWidget(main_splitter)

        main_splitter.addWidget(self.create_color_editor())
        main_splitter.addWidget(self.create_preview())
        main_splitter.setSizes([360, 540])

        self.status_bar = self.statusBar()
        self.status_bar.showMessage('Ready')

    def create_menu_bar(self):
        """Create the application menu bar"""
        menubar = self.menuBar()

        file_menu = menubar.addMenu('File')

        import_gs_action = file_menu.addAction('&Import GS from Clipboard')
        import_gs_action.setShortcut('Ctrl+Shift+V')
        import_gs_action.triggered.connect(self.import_gameshark)

        export_gs_action = file_menu.addAction('&Export GS to Clipboard')
        export_gs_action.setShortcut('Ctrl+Shift+C')
        export_gs_action.triggered.connect(self.export_gameshark)

        file_menu.addSeparator()

        open_code_action = file_menu.addAction('&Open Code File')
        open_code_action.setShortcut('Ctrl+O')
        open_code_action.triggered.connect(self.import_code_file)

        save_code_action = file_menu.addAction('&Save Code File')
        save_code_action.setShortcut('Ctrl+S')
        save_code_action.triggered.connect(self.export_code_file)

        file_menu.addSeparator()

        export_swatch_action = file_menu.addAction('Export Swatch &PNG')
        export_swatch_action.setShortcut('Ctrl+Shift+P')
        export_swatch_action.triggered.connect(self.export_swatch)

        import_swatch_action = file_menu.addAction('Import S&watch PNG')
        import_swatch_action.setShortcut('Ctrl+Shift+I')
        import_swatch_action.triggered.connect(self.import_swatch)

        file_menu.addSeparator()

        exit_action = file_menu.addAction('E&xit')
        exit_action.setShortcut('Alt+F4')
        exit_action.triggered.connect(self.close)

        edit_menu = menubar.addMenu('&Edit')

        undo_action = edit_menu.addAction('&Undo')
        undo_action.setShortcut('Ctrl+Z')
        undo_action.triggered.connect(self.undo_color_change)

        redo_action = edit_menu.addAction('&Redo')
        redo_action.setShortcut('Ctrl+Y')
        redo_action.triggered.connect(self.redo_color_change)

        edit_menu.addSeparator()

        random_action = edit_menu.addAction('R&andom')
        random_action.setShortcut('Ctrl+R')
        random_action.triggered.connect(self.randomize_colors)

        lucky_action = edit_menu.addAction('I Feel &Lucky')
        lucky_action.setShortcut('Ctrl+L')
        lucky_action.triggered.connect(self.feel_lucky)

        reset_action = edit_menu.addAction('Reset to &Defaults')
        reset_action.triggered.connect(self.reset_palette)

        view_menu = menubar.addMenu('&View')

        zoom_in_action = view_menu.addAction('Zoom &In')
        zoom_in_action.setShortcut('Ctrl++')
        zoom_in_action.triggered.connect(lambda: self.preview_label.set_zoom(self.preview_label.zoom_factor * 1.2))

        zoom_out_action = view_menu.addAction('Zoom &Out')
        zoom_out_action.setShortcut('Ctrl+-')
        zoom_out_action.triggered.connect(lambda: self.preview_label.set_zoom(self.preview_label.zoom_factor * 0.8))

        zoom_reset_action = view_menu.addAction('&Reset Zoom')
        zoom_reset_action.setShortcut('Ctrl+0')
        zoom_reset_action.triggered.connect(lambda: self.preview_label.set_zoom(1.0))

    def create_color_editor(self):
        """Create the color editor panel: one row per slot, primary and ambient buttons"""
        editor_widget = QWidget()
        editor_layout = QVBoxLayout()
        editor_layout.setContentsMargins(5, 5, 5, 5)
        editor_layout.setSpacing(5)

        title = QLabel('Character Colors')
        title.setStyleSheet('font-size: 16px; font-weight: bold; padding: 5px;')
        editor_layout.addWidget(title)

        grid_toggle = QCheckBox('Show Grid')
        grid_toggle.setChecked(self.renderer.show_grid)
        grid_toggle.toggled.connect(self.toggle_grid)
        editor_layout.addWidget(grid_toggle)

        grid = QGridLayout()
        grid.setSpacing(5)
        grid.addWidget(QLabel('Color'), 0, 0)
        grid.addWidget(QLabel('Shade'), 0, 1)

        for row, name in enumerate(SLOT_NAMES, start=1):
            for column, field in enumerate(FIELDS):
                btn = self.create_color_button(name, field)
                self.color_buttons[(name, field)] = btn
                grid.addWidget(btn, row, column)
            grid.addWidget(QLabel(f'{SLOT_LABELS[name]} Color'), row, 2)

        editor_layout.addLayout(grid)

        gs_buttons_layout = QHBoxLayout()

        import_btn = QPushButton('Import GS')
        import_btn.setToolTip('Read a GameShark code from the clipboard')
        import_btn.clicked.connect(self.import_gameshark)
        gs_buttons_layout.addWidget(import_btn)

        export_btn = QPushButton('Export GS')
        export_btn.setToolTip('Copy the GameShark code to the clipboard')
        export_btn.clicked.connect(self.export_gameshark)
        gs_buttons_layout.addWidget(export_btn)

        editor_layout.addLayout(gs_buttons_layout)

        random_buttons_layout = QHBoxLayout()

        random_btn = QPushButton('Random')
        random_btn.clicked.connect(self.randomize_colors)
        random_buttons_layout.addWidget(random_btn)

        lucky_btn = QPushButton('I Feel Lucky')
        lucky_btn.clicked.connect(self.feel_lucky)
        random_buttons_layout.addWidget(lucky_btn)

        editor_layout.addLayout(random_buttons_layout)
        editor_layout.addStretch(1)

        editor_widget.setLayout(editor_layout)
        return editor_widget

    def create_preview(self):
        """Create the preview panel"""
        widget = QWidget()
        layout = QVBoxLayout(widget)

        title = QLabel('Preview')
        title.setStyleSheet('font-size: 14px; font-weight: bold; padding: 5px;')
        layout.addWidget(title)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(False)
        self.scroll_area.setAlignment(Qt.AlignCenter)

        self.preview_label = ZoomableLabel()
        self.preview_label.editor = self
        self.preview_label.scroll_area = self.scroll_area

        self.scroll_area.setWidget(self.preview_label)
        layout.addWidget(self.scroll_area)

        return widget

    def create_color_button(self, slot_name, field):
        """Create a button editing one color; right click pastes from the clipboard"""
        btn = QPushButton()
        btn.setFixedSize(90, 36)
        btn.clicked.connect(lambda checked, s=slot_name, f=field: self.edit_color(s, f))

        def mousePressEvent(event):
            if event.button() == Qt.RightButton:
                self.paste_color_from_clipboard(slot_name, field)
            else:
                QPushButton.mousePressEvent(btn, event)

        btn.mousePressEvent = mousePressEvent
        return btn

    def style_color_button(self, btn, color):
        hex_text = to_hex_text(color)
        text_color = 'black' if color_brightness(color) > 128 else 'white'
        btn.setText(hex_text)
        btn.setToolTip(hex_text)
        btn.setStyleSheet(f'''
            QPushButton {{
                background-color: {hex_text};
                border: 2px solid #555;
                color: {text_color};
                font-size: 10px;
                font-weight: bold;
            }}
            QPushButton:hover {{
                border: 2px solid white;
            }}
        ''')

    def refresh(self):
        """Re-sync buttons and preview with the palette"""
        for (name, field), btn in self.color_buttons.items():
            self.style_color_button(btn, self.palette.get_color(name, field))
        self.update_preview()

    def update_preview(self):
        image = self.renderer.render(self.palette)
        self.preview_label.setCurrentPixmap(pil_to_qpixmap(image))

    def toggle_grid(self, checked):
        self.renderer.show_grid = checked
        self.settings_manager.set('show_grid', checked)
        self.settings_manager.save_settings()
        self.update_preview()

    def edit_color(self, slot_name, field):
        """Edit a color with the color picker dialog"""
        color_dialog = QColorDialog(self)
        color_dialog.setCurrentColor(color_to_qcolor(self.palette.get_color(slot_name, field)))

        if color_dialog.exec_() == QColorDialog.Accepted:
            self.save_palette_to_history()
            self.palette.set_color(slot_name, field, qcolor_to_color(color_dialog.currentColor()))
            self.refresh()

    def paste_color_from_clipboard(self, slot_name, field):
        """Paste a color from the clipboard (right-click functionality)"""
        text = QApplication.clipboard().text().strip()
        parsed_color = parse_color_from_clipboard(text)

        if parsed_color is None and gameshark_format.is_gameshark_code(text):
            self.import_gameshark()
            return

        if parsed_color is None:
            QMessageBox.warning(self, 'Invalid Color', f'Could not parse color from: {text}')
            return

        self.save_palette_to_history()
        self.palette.set_color(slot_name, field, parsed_color)
        self.refresh()

    def apply_imported_palette(self, palette, source):
        self.save_palette_to_history()
        self.palette = palette
        self.refresh()
        self.status_bar.showMessage(f'Imported colors from {source}')
        logger.info(f"Imported palette from {source}")

    def import_gameshark(self):
        """Replace the palette with the GameShark code on the clipboard"""
        text = QApplication.clipboard().text()
        try:
            palette = gameshark_format.decode(text, base=self.palette)
        except FormatError as e:
            logger.warning(f"Could not import GameShark code: {e}")
            QMessageBox.warning(self, 'Import GS', f'Could not import: {e}')
            return

        self.apply_imported_palette(palette, 'clipboard')

    def export_gameshark(self):
        """Copy the palette as a GameShark code to the clipboard"""
        QApplication.clipboard().setText(gameshark_format.encode(self.palette))
        logger.info("Exported GameShark code to clipboard")
        QMessageBox.information(self, 'Export GS', 'Copied to clipboard')

    def import_code_file(self):
        """Load a GameShark code from a text file"""
        last_dir = self.settings_manager.get_last_directory('import_code')
        filename, _ = QFileDialog.getOpenFileName(
            self, 'Open Code File', last_dir,
            'Text Files (*.txt);;All Files (*)'
        )
        if not filename:
            return

        try:
            with open(filename, 'r', encoding='utf-8') as f:
                palette = gameshark_format.decode(f.read(), base=self.palette)
        except (OSError, UnicodeDecodeError, FormatError) as e:
            logger.warning(f"Could not import {filename}: {e}")
            QMessageBox.critical(self, 'Error', f'Could not import: {e}')
            return

        self.apply_imported_palette(palette, filename)
        self.settings_manager.save_last_directory('import_code', filename)

    def export_code_file(self):
        """Save the GameShark code to a text file"""
        last_dir = self.settings_manager.get_last_directory('export_code')
        filename, _ = QFileDialog.getSaveFileName(
            self, 'Save Code File', last_dir,
            'Text Files (*.txt);;All Files (*)'
        )
        if not filename:
            return

        try:
            with open(filename, 'w', encoding='utf-8', newline='\n') as f:
                f.write(gameshark_format.encode(self.palette))
        except OSError as e:
            QMessageBox.critical(self, 'Error', f'Failed to save code: {e}')
            return

        logger.info(f"Saved GameShark code to {filename}")
        self.settings_manager.save_last_directory('export_code', filename)

    def export_swatch(self):
        """Export the palette as a swatch PNG"""
        last_dir = self.settings_manager.get_last_directory('export_swatch')
        filename, _ = QFileDialog.getSaveFileName(
            self, 'Export Swatch', last_dir,
            'PNG Files (*.png);;All Files (*)'
        )
        if not filename:
            return

        try:
            swatch_png.export_swatch(self.palette, filename)
        except OSError as e:
            QMessageBox.critical(self, 'Error', f'Failed to export swatch: {e}')
            return

        self.settings_manager.save_last_directory('export_swatch', filename)

    def import_swatch(self):
        """Import the palette from a swatch PNG"""
        last_dir = self.settings_manager.get_last_directory('import_swatch')
        filename, _ = QFileDialog.getOpenFileName(
            self, 'Import Swatch', last_dir,
            'PNG Files (*.png);;All Files (*)'
        )
        if not filename:
            return

        try:
            palette = swatch_png.import_swatch(filename)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not import swatch {filename}: {e}")
            QMessageBox.critical(self, 'Error', f'Could not import: {e}')
            return

        self.apply_imported_palette(palette, filename)
        self.settings_manager.save_last_directory('import_swatch', filename)

    def randomize_colors(self):
        """Randomize every slot except the configured skip list"""
        self.save_palette_to_history()
        randomize_palette(self.palette, skip=tuple(self.settings_manager.get('random_skip_slots')))
        self.refresh()

    def feel_lucky(self):
        """Flick through random palettes for a random number of rounds"""
        if self.lucky_timer.isActive():
            return

        self.save_palette_to_history()
        self.lucky_rounds_left = feel_lucky_rounds()
        self.lucky_timer.start(LUCKY_TICK_MS)

    def _lucky_tick(self):
        randomize_palette(self.palette, skip=tuple(self.settings_manager.get('random_skip_slots')))
        self.lucky_rounds_left -= 1
        self.refresh()

        if self.lucky_rounds_left <= 0:
            self.lucky_timer.stop()

    def reset_palette(self):
        self.save_palette_to_history()
        self.palette = Palette.default()
        self.refresh()

    def save_palette_to_history(self):
        """Snapshot the palette before a change, ending any running lucky animation"""
        self.lucky_timer.stop()
        self.undo_history.append(self.palette.copy())
        self.redo_history.clear()

        if len(self.undo_history) > self.max_undo_history:
            self.undo_history.pop(0)

    def undo_color_change(self):
        """Undo the last palette change"""
        self.lucky_timer.stop()
        if not self.undo_history:
            return

        self.redo_history.append(self.palette.copy())
        if len(self.redo_history) > self.max_undo_history:
            self.redo_history.pop(0)

        self.palette = self.undo_history.pop()
        self.refresh()

    def redo_color_change(self):
        """Redo the last undone palette change"""
        self.lucky_timer.stop()
        if not self.redo_history:
            return

        self.undo_history.append(self.palette.copy())
        if len(self.undo_history) > self.max_undo_history:
            self.undo_history.pop(0)

        self.palette = self.redo_history.pop()
        self.refresh()

    def _swatch_at(self, pos):
        hit = self.renderer.hit_test(pos.x(), pos.y(), self.preview_label.zoom_factor)
        if hit is None:
            return None
        row, column = hit
        return SLOT_NAMES[row], PREVIEW_COLUMNS[column]

    def on_preview_hover(self, pos):
        """Show the hovered swatch in the status bar"""
        swatch = self._swatch_at(pos)
        if swatch is None:
            self.status_bar.showMessage('Ready')
            return

        name, column = swatch
        if column in FIELDS:
            hex_text = to_hex_text(self.palette.get_color(name, column))
            self.status_bar.showMessage(f'{SLOT_LABELS[name]} {column}: {hex_text}')
        else:
            material = describe_material(name, self.palette, self.renderer.emissive_intensity)
            hex_text = to_hex_text(from_channels(*self.renderer.lit_color(material)))
            self.status_bar.showMessage(f'{SLOT_LABELS[name]} lit: {hex_text}')

    def on_preview_click(self, pos):
        """Clicking a primary or ambient swatch opens its color picker"""
        swatch = self._swatch_at(pos)
        if swatch is not None and swatch[1] in FIELDS:
            self.edit_color(*swatch)

    def closeEvent(self, event):
        self.lucky_timer.stop()
        self.settings_manager.save_settings()
        super().closeEvent(event)
