#!/usr/bin/env python3
"""
Render a saved diagram over the court background to a PNG file.
Usage: python render_diagram.py --diagram drill.json --output drill.png [--background court.jpg] [--scale 2]
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from court_diagrams.core.viewer_config import ViewerConfig
from court_diagrams.services import court_image
from court_diagrams.services.diagram_viewer import DiagramViewer


def main():
    parser = argparse.ArgumentParser(description='Render a tactical diagram to PNG')
    parser.add_argument('--diagram', required=True, help='Diagram JSON file')
    parser.add_argument('--output', required=True, help='Output PNG path')
    parser.add_argument('--background', help='Background image path or URL (default: generated court)')
    parser.add_argument('--scale', type=float, default=1.0, help='Pixels per logical unit')
    parser.add_argument('--blank-on-failure', action='store_true',
                        help='Draw on a blank surface if the background cannot be loaded')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    background = args.background or str(court_image.ensure_court_image())
    config = ViewerConfig(
        background=background,
        scale=args.scale,
        on_background_failure="blank" if args.blank_on_failure else "skip"
    )

    is_valid, error_msg = config.validate()
    if not is_valid:
        print(f"Invalid options: {error_msg}")
        return 1

    serialized = Path(args.diagram).read_text()
    viewer = DiagramViewer(config=config)
    outcome = asyncio.run(viewer.show(serialized))

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(viewer.surface.to_png())

    print(f"Status: {outcome.status}")
    print(f"Elements drawn: {outcome.elements_drawn} (skipped {outcome.skipped})")
    for issue in outcome.issues:
        print(f"  - element {issue.index} ({issue.kind}): {issue.reason}")
    if outcome.message:
        print(f"Message: {outcome.message}")
    print(f"Output: {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
