from __future__ import annotations

import argparse
import logging
import sys

from PIL import Image

from .canvas import WaveCanvas
from .utils.log import LEVELS, init_log

logger = logging.getLogger(__name__)

BACKGROUND = (11, 11, 11, 255)


def flatten(img: Image.Image) -> Image.Image:
    return Image.alpha_composite(Image.new("RGBA", img.size, BACKGROUND), img).convert("RGB")


def render_gif(
    out: str,
    height: int = 800,
    document_height: int = 2400,
    frames: int = 300,
    scroll_every: int = 0,
    scroll_delta: float = 40.0,
    fps: int = 30,
) -> int:
    """Render a scripted session to an animated GIF; return the frame count written.

    Frames are quantized up front; consecutive frames that quantize to the
    same picture are stored once with their durations summed, as the GIF
    writer would merge them anyway.
    """
    canvas = WaveCanvas(height, (document_height,))
    canvas.start()
    step_ms = int(1000 / max(1, fps))
    images, durations = [], []
    last = None
    for i in range(frames):
        if scroll_every > 0 and i % scroll_every == 0 and i > 0:
            max_offset = max(0.0, document_height - height)
            offset = min(max_offset, canvas.page.scroll_offset + scroll_delta)
            canvas.adapter.scroll(offset)
        canvas.host.step()
        img = flatten(canvas.image()).convert("P", palette=Image.Palette.ADAPTIVE)
        data = img.convert("RGB").tobytes()
        if data == last:
            durations[-1] += step_ms
            continue
        last = data
        images.append(img)
        durations.append(step_ms)
    if not images:
        return 0
    images[0].save(
        out,
        save_all=True,
        append_images=images[1:],
        duration=durations,
        loop=0,
        disposal=2,
    )
    logger.info("wrote %d frames to %s (%d rendered)", len(images), out, canvas.frames_rendered)
    return len(images)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wavelines", description="Scroll-driven vertical wave lines.")
    parser.add_argument("--log-level", default="info", choices=sorted(LEVELS), help="Logging level (default: info)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the web demo page")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)
    serve.add_argument("--no-browser", action="store_true", help="Do not open a browser window")

    render = sub.add_parser("render", help="Render a scripted scroll session to an animated GIF")
    render.add_argument("--out", default="waves.gif")
    render.add_argument("--height", type=int, default=800, help="Viewport height (default: 800)")
    render.add_argument("--document-height", type=int, default=2400, help="Page height (default: 2400)")
    render.add_argument("--frames", type=int, default=300)
    render.add_argument("--scroll-every", type=int, default=0, help="Scroll once every N frames (0: never)")
    render.add_argument("--scroll-delta", type=float, default=40.0, help="Pixels per scroll (default: 40)")
    render.add_argument("--fps", type=int, default=30)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    init_log(args.log_level)

    if args.command == "serve":
        from .web import serve

        serve(args.host, args.port, browser=not args.no_browser)
        return 0

    render_gif(
        args.out,
        height=args.height,
        document_height=args.document_height,
        frames=args.frames,
        scroll_every=args.scroll_every,
        scroll_delta=args.scroll_delta,
        fps=args.fps,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
