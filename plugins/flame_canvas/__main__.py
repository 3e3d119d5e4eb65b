"""
Picture Viewer - Entry Point

Usage:
    python -m flame_canvas [picture] [--size WxH] [--window WxH]
                           [--cell-size N] [--mode MODE] [--grid] [--play]
                           [--snap N]

Examples:
    python -m flame_canvas
    python -m flame_canvas plasma --play
    python -m flame_canvas plasma --size 128x128 --cell-size 4 --grid
    python -m flame_canvas plasma --mode grayscale --snap 30

Modes:
    full_color       Cell RGB (default)
    grayscale        Cell alpha, inverted brightness
    bicolor_counter  Dark for cells never hit, light otherwise

Use --list to see all available pictures.
"""

import os
import sys

from .config import (
    CELL_SIZE, PIC_WIDTH, PIC_HEIGHT, RENDER_MODE_ORDER, RenderMode,
    parse_render_mode,
)
from .picture import PICTURES, PICTURE_ORDER


def _parse_size(text):
    parts = text.lower().split("x")
    return int(parts[0]), int(parts[1])


def snap(picture_name, pic_w, pic_h, steps, cell_size=CELL_SIZE,
         mode=RenderMode.FULL_COLOR, gridlines=False, out_dir=None):
    """Headless mode: paint, tick N times, render, save a PNG, exit."""
    import numpy as np
    import pygame
    from PIL import Image

    from .buffer_view import BufferView
    from .color_mapper import to_hex
    from .picture import create_picture
    from .renderer import GridRenderer
    from .viewer import screenshots_dir

    picture = create_picture(picture_name, pic_w, pic_h)
    view = BufferView(picture)
    renderer = GridRenderer(cell_size=cell_size, mode=mode, gridlines=gridlines)
    surface = renderer.create_surface(pic_w, pic_h)

    print(f"  {picture_name}: painting + {steps} ticks...", end="", flush=True)
    picture.paint()
    for _ in range(steps):
        picture.tick()
    renderer.blit(surface, view)

    rgb = np.ascontiguousarray(pygame.surfarray.array3d(surface).swapaxes(0, 1))
    img = Image.fromarray(rgb)
    out_dir = out_dir or screenshots_dir()
    path = os.path.join(out_dir, f"flame_{picture_name}.png")
    img.save(path)
    img.save(os.path.join(out_dir, "latest.png"))
    mean = rgb[1:, 1:].reshape(-1, 3).mean(axis=0)
    print(f" saved: {path}  (mean color {to_hex(tuple(int(c) for c in mean))})")
    return path


def main(argv=None):
    picture = "plasma"
    pic_w, pic_h = PIC_WIDTH, PIC_HEIGHT
    win_w, win_h = None, None
    cell_size = CELL_SIZE
    mode = RenderMode.FULL_COLOR
    gridlines = False
    play = False
    snap_steps = None

    args = sys.argv[1:] if argv is None else list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--size" and i + 1 < len(args):
            pic_w, pic_h = _parse_size(args[i + 1])
            i += 2
        elif arg == "--window" and i + 1 < len(args):
            win_w, win_h = _parse_size(args[i + 1])
            i += 2
        elif arg == "--cell-size" and i + 1 < len(args):
            cell_size = int(args[i + 1])
            i += 2
        elif arg == "--mode" and i + 1 < len(args):
            mode = parse_render_mode(args[i + 1])
            i += 2
        elif arg == "--snap" and i + 1 < len(args):
            snap_steps = int(args[i + 1])
            i += 2
        elif arg == "--grid":
            gridlines = True
            i += 1
        elif arg == "--play":
            play = True
            i += 1
        elif arg == "--list":
            print("\nAvailable pictures:")
            for key in PICTURE_ORDER:
                print(f"    {key:16s} {PICTURES[key].picture_label}")
            print(f"\nRender modes: {', '.join(RENDER_MODE_ORDER)}\n")
            return
        elif arg in ("--help", "-h"):
            print(__doc__)
            return
        elif arg in PICTURES:
            picture = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print("Use --list to see available pictures")
            return

    if snap_steps is not None:
        print(f"Headless snap mode: {picture} @ {pic_w}x{pic_h}, {snap_steps} ticks")
        snap(picture, pic_w, pic_h, snap_steps, cell_size=cell_size,
             mode=mode, gridlines=gridlines)
        return

    from .viewer import Viewer

    print("[flame] Starting picture viewer")
    print(f"  Picture: {picture}")
    print(f"  Grid: {pic_w}x{pic_h}  cell size {cell_size}  mode {mode.value}")
    print("  SPACE play/pause  S screenshot  Q quit")
    print()

    viewer = Viewer(
        picture=picture,
        width=win_w,
        height=win_h,
        pic_width=pic_w,
        pic_height=pic_h,
        cell_size=cell_size,
        mode=mode,
        gridlines=gridlines,
        play=play,
    )
    viewer.run()


if __name__ == "__main__":
    main()
