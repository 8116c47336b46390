# pyglet frontend: graphics, sound output and keyboard handling.
#----------------------------------------------------------------------------------------------
# The window owns a Runner and schedules one frame per timer period. Drawing
# goes through a single RGBA ImageData that is upscaled with numpy.repeat.
#----------------------------------------------------------------------------------------------

import logging

import numpy as np
import pyglet
from pyglet.media import synthesis
from pyglet.window import key

from .constants import WIDTH, HEIGHT
from .keymap import KEYMAP
from .log import toggle_logs
from .runner import Runner

logger = logging.getLogger("chip8")

WHITE = (255, 255, 255, 255)


def generate_beep(duration=1.0, frequency=440, sample_rate=44100):
    # Use a Sine waveform from pyglet.media.synthesis
    wave = synthesis.Sine(duration=duration, frequency=frequency, sample_rate=sample_rate)
    return pyglet.media.StaticSource(wave)


class Beeper:
    """Looping tone that plays while the sound timer is running."""

    def __init__(self, frequency=440):
        self.player = pyglet.media.Player()
        self.player.loop = True
        self.player.queue(generate_beep(frequency=frequency))
        self.playing = False

    def update(self, on):
        if on and not self.playing:
            self.player.play()
            self.playing = True
        elif not on and self.playing:
            self.player.pause()
            self.playing = False

    def delete(self):
        self.player.delete()


class Chip8Window(pyglet.window.Window):

    def __init__(self, machine, config, caption="CHIP-8 Emulator"):
        self.pixel_scale = config.scale
        self._shut_down = False
        super().__init__(
            width=WIDTH * self.pixel_scale,
            height=HEIGHT * self.pixel_scale,
            caption=caption,
            vsync=False
        )
        self.machine = machine
        self.settings = config
        self.runner = Runner(machine, config)
        # pyglet key symbol -> keymap name
        self.keysyms = {getattr(key, name): name for name in KEYMAP}

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled on draw
        self._small_framebuf = np.zeros((HEIGHT, WIDTH, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            self.width,
            self.height,
            'RGBA',
            bytes(self.width * self.height * 4)
        )

        self.beeper = Beeper()

        # ---- Performance Counters ----
        self._fps_counter = 0
        self._cps_counter = 0
        self.fps_label = self._label("FPS: 0", y=self.height - 15)
        self.cps_label = self._label("Cycles/s: 0", y=self.height - 30)

        # Schedule the loops
        pyglet.clock.schedule_interval(self._frame, 1 / config.timer_hz)
        pyglet.clock.schedule_interval(self._update_bench, 1.0)

    def _label(self, text, y):
        return pyglet.text.Label(
            text,
            font_size=12,
            x=5,
            y=y,
            anchor_x='left',
            anchor_y='center',
            color=WHITE
        )

    # ---- timer frame ----
    def _frame(self, dt):
        self._cps_counter += self.runner.frame()
        self.beeper.update(self.machine.is_playing_sound())
        if self.runner.halted:
            logger.error("emulation halted: %s", self.runner.fault)
            self.close()

    # FPS / CPS
    def _update_bench(self, dt):
        self.fps_label.text = f"FPS: {self._fps_counter / dt:.1f}"
        self.cps_label.text = f"Cycles/s: {self._cps_counter / dt:.0f}"
        self._fps_counter = 0
        self._cps_counter = 0

    # ---- Drawing ----
    def on_draw(self):
        self.clear()

        # pyglet's origin is bottom-left, the CHIP-8 screen's is top-left
        pixels = np.flipud(self.machine.get_display()) * 255
        self._small_framebuf[..., :3] = pixels[..., None]

        if self.pixel_scale != 1:
            scaled = np.repeat(np.repeat(self._small_framebuf, self.pixel_scale, axis=0), self.pixel_scale, axis=1)
        else:
            scaled = self._small_framebuf

        #updates existing image without creating new object
        self.image.set_data('RGBA', self.width * 4, scaled.tobytes())
        self.image.blit(0, 0)

        if self.settings.show_hud:
            self.fps_label.draw()
            self.cps_label.draw()

        self._fps_counter += 1

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        elif symbol == key.F1:
            toggle_logs()
        elif symbol in self.keysyms:
            self.runner.keyboard.press(self.keysyms[symbol])

    def on_key_release(self, symbol, modifiers):
        if symbol in self.keysyms:
            self.runner.keyboard.release(self.keysyms[symbol])

    def on_deactivate(self):
        # keys released while unfocused never reach us
        self.runner.keyboard.release_all()

    # ESC, a halt and the window's close button all end up here
    def close(self):
        self.shutdown()
        super().close()

    def shutdown(self):
        if self._shut_down:
            return
        self._shut_down = True
        pyglet.clock.unschedule(self._frame)
        pyglet.clock.unschedule(self._update_bench)
        self.beeper.delete()


def run_window(machine, config, caption="CHIP-8 Emulator"):
    window = Chip8Window(machine, config, caption=caption)
    pyglet.app.run()
    return 1 if window.runner.halted else 0
