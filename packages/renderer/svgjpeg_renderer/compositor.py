"""Alpha compositing of rendered RGBA pixels over an opaque background."""

from __future__ import annotations

import numpy as np

from .models import Color, RgbaBuffer, RgbBuffer


def composite(buffer: RgbaBuffer, background: Color) -> RgbBuffer:
    """Flatten ``buffer`` onto ``background`` and drop the alpha channel.

    Straight alpha: ``out = round(src * a + bg * (1 - a))``.
    Premultiplied alpha: ``out = src + round(bg * (1 - a))``.
    Rounding is exact integer half-up over ``/ 255``.
    """
    expected = buffer.width * buffer.height * 4
    if len(buffer.data) != expected:
        raise ValueError(
            f"RGBA data length {len(buffer.data)} does not match {buffer.width}x{buffer.height}"
        )

    arr = np.frombuffer(buffer.data, dtype=np.uint8).reshape((-1, 4)).astype(np.uint32)
    src = arr[:, :3]
    alpha = arr[:, 3:4]
    inverse = 255 - alpha
    bg = np.array(background.as_tuple(), dtype=np.uint32)

    if buffer.premultiplied:
        out = src + (bg * inverse + 127) // 255
        out = np.minimum(out, 255)
    else:
        # 255 is odd, so n / 255 is never exactly .5 and +127 rounds half-up.
        out = (src * alpha + bg * inverse + 127) // 255

    return RgbBuffer(width=buffer.width, height=buffer.height, data=out.astype(np.uint8).tobytes())
