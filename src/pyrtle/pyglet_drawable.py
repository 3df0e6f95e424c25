## windowed turtle screen for pyrtle using pyglet
## Copyright (c) 2026 pyrtle contributors
## All rights reserved
## See licensing terms in the LICENSE file at the top of the repository

import math

import pyglet

from .raster_drawable import RasterScreen


def _rgba255(color):
    return tuple(int(round(min(1.0, max(0.0, c)) * 255)) for c in color)


class PygletScreen(RasterScreen):
    """
    ``RasterScreen`` shown in a pyglet window.

    The raster buffer is blitted as an image and text primitives are
    drawn on top as labels, rotated to the orientation they were written
    with. Every ``draw_and_update`` repaints the window immediately.
    """

    def __init__(self, size=(640, 480), title="pyrtle"):
        self._window = None
        super().__init__(size, title)
        self._window = pyglet.window.Window(width=size[0], height=size[1],
                                            caption=title, resizable=False)
        self._window.on_draw = self._paint

    @property
    def window(self):
        return self._window

    def _paint(self):
        window = self._window
        window.clear()
        w, h = self.size
        image = pyglet.image.ImageData(w, h, 'RGBA', self.buffer.tobytes(),
                                       pitch=-w * 4)
        image.blit(0, 0)
        batch = pyglet.graphics.Batch()
        labels = []
        for text in self.texts:
            x, y = text.position
            if not all(math.isfinite(v) for v in (x, y, text.orientation)):
                continue
            labels.append(pyglet.text.Label(text.text,
                                            x=x + w / 2.0, y=y + h / 2.0,
                                            anchor_x='left', anchor_y='bottom',
                                            color=_rgba255(text.color),
                                            rotation=-text.orientation,
                                            batch=batch))
        batch.draw()

    def draw_and_update(self):
        super().draw_and_update()
        window = self._window
        if window is None or window.has_exit:
            return
        window.switch_to()
        window.dispatch_events()
        self._paint()
        window.flip()

    def show_until_closed(self):
        """Keep the window open until the user closes it."""
        self.render()
        pyglet.app.run()
