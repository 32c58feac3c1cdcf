"""QRMeasure command-line entry point.

Detects calibration markers in a photo and reports the size of each
``--box`` in the marker's units.
"""

import argparse
import sys

from loguru import logger

from qrmeasure.version import __version_display__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qrmeasure",
        description="Measure boxes in a photo using a QR code of known size.",
    )
    parser.add_argument("image", help="Photo containing one or more calibration markers")
    parser.add_argument(
        "--box",
        nargs=4,
        type=float,
        action="append",
        default=[],
        metavar=("X", "Y", "W", "H"),
        help="Box to measure (display space if --display-size is given, else image pixels)",
    )
    parser.add_argument(
        "--add-box",
        action="store_true",
        help="Also measure a default-sized box centred in the view",
    )
    parser.add_argument(
        "--display-size",
        nargs=2,
        type=float,
        metavar=("W", "H"),
        help="Size of the view the photo is shown aspect-fit in",
    )
    parser.add_argument("--config-dir", help="Directory holding qrmeasure_config.json")
    parser.add_argument("--log-level", help="Console log level (overrides config)")
    parser.add_argument("--version", action="version", version=__version_display__)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run a detect-calibrate-measure pass over one photo."""
    args = build_parser().parse_args(argv)

    from qrmeasure.config.manager import ConfigManager
    from qrmeasure.core.logging import setup_logging

    config = ConfigManager(config_dir=args.config_dir)
    config.load()
    setup_logging(config, level=args.log_level)

    from qrmeasure.core.boxes import MeasuredBox
    from qrmeasure.core.geometry import AffineTransform, Rectangle, Size, aspect_fit_transform
    from qrmeasure.core.session import MeasurementSession
    from qrmeasure.detection.detector import Detection, OpenCVQRDetector
    from qrmeasure.detection.worker import DetectionWorker
    from qrmeasure.importers.image import can_import, load_image

    if not can_import(args.image):
        logger.warning(f"Unrecognised image extension: {args.image}")
    try:
        pixels = load_image(args.image)
    except OSError as e:
        print(f"Cannot read image {args.image}: {e}", file=sys.stderr)
        return 1

    image_size = Size(float(pixels.shape[1]), float(pixels.shape[0]))
    image_to_display = AffineTransform.identity()
    if args.display_size:
        try:
            image_to_display = aspect_fit_transform(image_size, Size(*args.display_size))
        except ValueError as e:
            print(f"Invalid display size: {e}", file=sys.stderr)
            return 2

    session = MeasurementSession.from_config(config, display_to_image=image_to_display.inverted())

    max_workers = int(config.get("detection", "max_workers", 1))
    with DetectionWorker(OpenCVQRDetector(), max_workers=max_workers) as worker:
        found = worker.submit(pixels).result()

    # The detector reports image pixels; the session expects display space
    detections = [
        Detection(image_to_display.apply_to_rect(d.rect), d.payload, d.raw_value) for d in found
    ]

    print("Detection Results")
    print(session.results_text(detections))

    session.calibrate_from(detections)
    state = session.calibration
    if session.is_calibrated:
        print(f"Calibration: 1 {state.unit_label} = {state.scale_factor:.4f} px")
    else:
        print("No calibration available; showing raw pixel measurements")

    boxes = [MeasuredBox(Rectangle(x, y, w, h)) for x, y, w, h in args.box]
    if args.add_box:
        view_size = Size(*args.display_size) if args.display_size else image_size
        boxes.append(
            MeasuredBox.centered_in(
                view_size,
                width=float(config.get("boxes", "default_width", 100.0)),
                height=float(config.get("boxes", "default_height", 100.0)),
            )
        )

    for box in boxes:
        if session.measure_box(box) is None:
            print(f"Box {box.rect}: invalid rectangle, skipped")
            continue
        print(f"Box {box.rect}: {box.label}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
