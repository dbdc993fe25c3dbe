"""Decoding of animated GIF backgrounds and frame timing."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

from PIL import Image


class GifError(ValueError):
    """Raised when a file is not a usable GIF."""


class _Disposal(IntEnum):
    UNSPECIFIED = 0
    KEEP = 1
    BACKGROUND = 2
    PREVIOUS = 3


@dataclass
class AnimatedGif:
    """Fully composited RGBA frames with their display delays in seconds."""

    frames: list[Image.Image]
    delays: list[float]
    width: int
    height: int

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


@dataclass
class _Frame:
    left: int
    top: int
    width: int
    height: int
    delay_cs: int
    disposal: _Disposal
    pixels: list  # one 4-byte RGBA value per pixel, None where transparent


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def take(self, n: int) -> bytes:
        end = self._pos + n
        if end > len(self._data):
            raise GifError("unexpected end of GIF data")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def byte(self) -> int:
        return self.take(1)[0]

    def u16(self) -> int:
        return int.from_bytes(self.take(2), "little")

    def sub_blocks(self) -> bytes:
        chunks = []
        while (size := self.byte()) != 0:
            chunks.append(self.take(size))
        return b"".join(chunks)


def _read_palette(reader: _Reader, packed: int) -> list[bytes]:
    raw = reader.take(3 * (2 << (packed & 0x07)))
    return [raw[i:i + 3] for i in range(0, len(raw), 3)]


def _read_header(reader: _Reader) -> tuple[int, int, list[bytes] | None]:
    if reader.take(6) not in (b"GIF87a", b"GIF89a"):
        raise GifError("not a GIF file")
    width = reader.u16()
    height = reader.u16()
    packed = reader.byte()
    reader.take(2)
    palette = _read_palette(reader, packed) if packed & 0x80 else None
    return width, height, palette


def _lzw_decode(data: bytes, min_code_size: int, count: int) -> bytes:
    if not 1 <= min_code_size <= 11:
        raise GifError(f"invalid LZW code size {min_code_size}")
    clear = 1 << min_code_size
    end = clear + 1
    base = [bytes([i]) for i in range(clear)] + [b"", b""]
    table = list(base)
    code_size = min_code_size + 1
    prev: bytes | None = None
    out = bytearray()
    bits = 0
    nbits = 0
    for byte in data:
        bits |= byte << nbits
        nbits += 8
        while nbits >= code_size:
            code = bits & ((1 << code_size) - 1)
            bits >>= code_size
            nbits -= code_size
            if code == clear:
                table = list(base)
                code_size = min_code_size + 1
                prev = None
                continue
            if code == end:
                return bytes(out[:count]).ljust(count, b"\0")
            if prev is None:
                if code >= len(table):
                    raise GifError("invalid LZW code")
                entry = table[code]
            elif code < len(table):
                entry = table[code]
                if len(table) < 4096:
                    table.append(prev + entry[:1])
            elif code == len(table):
                entry = prev + prev[:1]
                if len(table) < 4096:
                    table.append(entry)
            else:
                raise GifError("invalid LZW code")
            out += entry
            prev = entry
            if len(table) == (1 << code_size) and code_size < 12:
                code_size += 1
    return bytes(out[:count]).ljust(count, b"\0")


def _deinterlace(indices: bytes, width: int, height: int) -> bytes:
    rows = [indices[r * width:(r + 1) * width] for r in range(height)]
    order = [
        y
        for start, step in ((0, 8), (4, 8), (2, 4), (1, 2))
        for y in range(start, height, step)
    ]
    placed = [b""] * height
    for row, y in zip(rows, order):
        placed[y] = row
    return b"".join(placed)


def _read_frames(reader: _Reader, global_palette: list[bytes] | None):
    delay_cs = 0
    disposal = _Disposal.UNSPECIFIED
    transparent: int | None = None
    while True:
        introducer = reader.byte()
        if introducer == 0x3B:
            return
        if introducer == 0x21:
            label = reader.byte()
            block = reader.sub_blocks()
            if label == 0xF9 and len(block) >= 4:
                packed = block[0]
                method = (packed >> 2) & 0x07
                disposal = _Disposal(method) if method <= 3 else _Disposal.UNSPECIFIED
                delay_cs = int.from_bytes(block[1:3], "little")
                transparent = block[3] if packed & 0x01 else None
            continue
        if introducer != 0x2C:
            raise GifError(f"unexpected block 0x{introducer:02x}")

        left, top, width, height = reader.u16(), reader.u16(), reader.u16(), reader.u16()
        packed = reader.byte()
        palette = _read_palette(reader, packed) if packed & 0x80 else global_palette
        if palette is None:
            raise GifError("frame has no color table")
        min_code_size = reader.byte()
        indices = _lzw_decode(reader.sub_blocks(), min_code_size, width * height)
        if packed & 0x40:
            indices = _deinterlace(indices, width, height)

        colors = [color + b"\xff" for color in palette]
        pixels = [
            None if index == transparent
            else colors[index] if index < len(colors)
            else b"\0\0\0\xff"
            for index in indices
        ]
        yield _Frame(left, top, width, height, delay_cs, disposal, pixels)
        delay_cs = 0
        disposal = _Disposal.UNSPECIFIED
        transparent = None


def get_gif_dimensions(path: str | Path) -> tuple[int, int]:
    """Logical screen size of a GIF file."""
    with open(path, "rb") as handle:
        width, height, _ = _read_header(_Reader(handle.read(13)))
    return width, height


def load_gif(path: str | Path) -> AnimatedGif:
    """Decode every frame of a GIF, compositing each onto a shared canvas."""
    reader = _Reader(Path(path).read_bytes())
    width, height, palette = _read_header(reader)
    canvas = bytearray(width * height * 4)
    frames: list[Image.Image] = []
    delays: list[float] = []

    for frame in _read_frames(reader, palette):
        delays.append(frame.delay_cs / 100)
        saved = bytes(canvas) if frame.disposal is _Disposal.PREVIOUS else None

        for row in range(frame.height):
            cy = frame.top + row
            if cy >= height:
                break
            line = frame.pixels[row * frame.width:(row + 1) * frame.width]
            for cx, rgba in enumerate(line, start=frame.left):
                if cx >= width:
                    break
                if rgba is not None:
                    offset = (cy * width + cx) * 4
                    canvas[offset:offset + 4] = rgba
        frames.append(Image.frombytes("RGBA", (width, height), bytes(canvas)))

        if frame.disposal is _Disposal.BACKGROUND:
            x0, x1 = min(frame.left, width), min(frame.left + frame.width, width)
            for cy in range(frame.top, min(frame.top + frame.height, height)):
                start = (cy * width + x0) * 4
                stop = (cy * width + x1) * 4
                canvas[start:stop] = bytes(stop - start)
        elif saved is not None:
            canvas = bytearray(saved)

    if not frames:
        raise GifError("GIF contains no frames")
    return AnimatedGif(frames, delays, width, height)


def fit_size(
    image_size: tuple[float, float], available: tuple[float, float]
) -> tuple[float, float] | None:
    """Largest size with the image's aspect ratio that fits ``available``."""
    img_w, img_h = image_size
    avail_w, avail_h = available
    if img_h == 0:
        return None
    ratio = avail_h / img_h if img_w == 0 else min(avail_w / img_w, avail_h / img_h)
    return img_w * ratio, img_h * ratio


@dataclass
class GifHandler:
    """Holds the current background animation and steps through its frames."""

    gif: AnimatedGif | None = None
    current_frame: int = 0
    last_frame_time: float = field(default_factory=time.monotonic)
    gif_load_id: int = 0
    current_path: Path | None = None

    def load_from_path(self, path: str | Path) -> bool:
        """Load a GIF, keeping the previous one if this fails."""
        try:
            gif = load_gif(path)
        except (OSError, ValueError):
            return False
        self.gif = gif
        self.current_frame = 0
        self.gif_load_id += 1
        self.current_path = Path(path)
        return True

    def tick(self, now: float | None = None) -> None:
        """Advance to the next frame once the current frame's delay has passed."""
        if self.gif is None:
            return
        now = time.monotonic() if now is None else now
        delay = self.gif.delays[self.current_frame]
        if now - self.last_frame_time >= delay:
            self.current_frame = (self.current_frame + 1) % len(self.gif.frames)
            self.last_frame_time = now

    def current_frame_image(self) -> Image.Image | None:
        if self.gif is None:
            return None
        return self.gif.frames[self.current_frame]

    def get_path_string(self) -> str | None:
        return str(self.current_path) if self.current_path is not None else None