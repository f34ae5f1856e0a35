"""
Redaction strategy demonstration.

Redacts a synthetic image with every registered strategy and prints how long
each one takes. Pass an image path to use a real photo instead:

    python examples/redaction_demo.py photo.jpg
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import time
from PIL import Image

from PB_Libs.ImageEditingLib.image_models import PixelBuffer
from PB_Libs.RedactionLib.redaction_engine import RedactionEngine
from PB_Libs.RedactionLib.strategy_registry import get_default_registry


def make_test_image(size=400):
    """Checkerboard so blurring is visible."""
    img = Image.new("RGBA", (size, size), (240, 240, 240, 255))
    pixels = img.load()
    for y in range(size):
        for x in range(size):
            if (x // 20 + y // 20) % 2:
                pixels[x, y] = (30, 60, 200, 255)
    return img


def corners(left, top, right, bottom):
    return [
        {"x": left, "y": top},
        {"x": right, "y": top},
        {"x": right, "y": bottom},
        {"x": left, "y": bottom},
    ]


def benchmark_strategy(buffer, raw_regions, kind, radius, iterations=3):
    """Render with one strategy and report timings."""
    engine = RedactionEngine.from_raw_regions(buffer, raw_regions, strategy=kind)
    print(f"\n{kind}: {len(engine.regions)} valid region(s), radius={radius}")
    print("-" * 60)

    times = []
    result = None
    for i in range(iterations):
        start = time.time()
        result = engine.render(radius)
        elapsed = time.time() - start
        times.append(elapsed)
        print(f"  run {i+1}: {elapsed:.3f}s")

    print(f"Average: {sum(times) / len(times):.3f}s")
    return result


def main():
    print("=" * 60)
    print("Photo Blur Redaction Demonstration")
    print("=" * 60)

    if len(sys.argv) > 1:
        image = Image.open(sys.argv[1])
    else:
        image = make_test_image()
    buffer = PixelBuffer.from_image(image)
    width, height = buffer.size

    raw_regions = [
        corners(10, 10, width // 3, height // 3),
        corners(width // 2, height // 2, width - 20, height - 20),
        # Rejected: not axis-aligned
        [{"x": 0, "y": 0}, {"x": 5, "y": 1}, {"x": 5, "y": 5}, {"x": 0, "y": 5}],
        # Rejected: outside the image
        corners(0, 0, width + 50, 10),
    ]

    output_dir = Path.cwd()
    for kind in get_default_registry().list_kinds():
        result = benchmark_strategy(buffer, raw_regions, kind, radius=12)
        out_path = output_dir / f"redacted_{kind}.png"
        result.to_image().save(out_path)
        print(f"Saved {out_path}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
