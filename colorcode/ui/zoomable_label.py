"""
ZoomableLabel - Preview QLabel with zoom and pan functionality
"""

from PyQt5.QtWidgets import QLabel
from PyQt5.QtCore import Qt


MIN_ZOOM = 0.5
MAX_ZOOM = 8.0


class ZoomableLabel(QLabel):
    """QLabel showing the palette preview, zoomed with the mouse wheel and panned with the middle button"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.zoom_factor = 1.0
        self.current_pixmap = None
        self.setAlignment(Qt.AlignCenter)
        self.setMouseTracking(True)
        self.editor = None  # Reference to ColorEditor

        self.middle_mouse_pressed = False
        self.last_pan_point = None
        self.scroll_area = None  # Set by the editor

    def setCurrentPixmap(self, pixmap):
        """Set the preview pixmap keeping the current zoom"""
        self.current_pixmap = pixmap
        self._apply_zoom()

    def set_zoom(self, zoom_factor):
        self.zoom_factor = max(MIN_ZOOM, min(zoom_factor, MAX_ZOOM))
        self._apply_zoom()

    def _apply_zoom(self):
        if self.current_pixmap is None:
            return

        scaled_pixmap = self.current_pixmap.scaled(
            int(self.current_pixmap.width() * self.zoom_factor),
            int(self.current_pixmap.height() * self.zoom_factor),
            Qt.KeepAspectRatio,
            Qt.FastTransformation
        )

        self.setFixedSize(scaled_pixmap.size())
        super().setPixmap(scaled_pixmap)

    def wheelEvent(self, event):
        if self.current_pixmap is None:
            return

        if event.angleDelta().y() > 0:
            self.set_zoom(self.zoom_factor * 1.1)
        else:
            self.set_zoom(self.zoom_factor * 0.9)

    def mouseMoveEvent(self, event):
        """Pan while the middle button is held, otherwise report the hovered swatch"""
        if self.middle_mouse_pressed and self.scroll_area and self.last_pan_point:
            delta = event.globalPos() - self.last_pan_point
            self.last_pan_point = event.globalPos()

            h_scroll = self.scroll_area.horizontalScrollBar()
            v_scroll = self.scroll_area.verticalScrollBar()
            h_scroll.setValue(h_scroll.value() - delta.x())
            v_scroll.setValue(v_scroll.value() - delta.y())

        elif self.editor:
            self.editor.on_preview_hover(event.pos())

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton and self.editor:
            self.editor.on_preview_click(event.pos())
        elif event.button() == Qt.MiddleButton:
            self.middle_mouse_pressed = True
            self.last_pan_point = event.globalPos()
            self.setCursor(Qt.ClosedHandCursor)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MiddleButton:
            self.middle_mouse_pressed = False
            self.last_pan_point = None
            self.setCursor(Qt.ArrowCursor)

    def leaveEvent(self, event):
        if self.editor and hasattr(self.editor, 'status_bar'):
            self.editor.status_bar.showMessage('Ready')

        if self.middle_mouse_pressed:
            self.middle_mouse_pressed = False
            self.last_pan_point = None
            self.setCursor(Qt.ArrowCursor)
