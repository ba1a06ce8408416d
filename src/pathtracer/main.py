# main.py
import argparse
import logging
import sys
from pathtracer.renderer.output import save_image
from pathtracer.renderer.raytracer import QUALITY_PRESETS, RenderSettings, Renderer
from pathtracer.renderer.tone_mapping import TONE_MAPPERS
from pathtracer.scenes import SCENES, build_scene

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pathtracer",
                                     description="Render one of the demo scenes to an image file.")
    parser.add_argument("--scene", choices=sorted(SCENES), default="random_spheres")
    parser.add_argument("--width", type=int, default=400)
    parser.add_argument("--height", type=int, default=225)
    parser.add_argument("--quality", choices=list(QUALITY_PRESETS), default="balanced",
                        help="Preset for samples and depth; --samples/--depth override it")
    parser.add_argument("--samples", type=int, help="Samples per pixel")
    parser.add_argument("--depth", type=int, help="Maximum scatter depth")
    parser.add_argument("--workers", type=int, help="Worker processes (default: CPU count)")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--tone-mapping", choices=list(TONE_MAPPERS), default="gamma")
    parser.add_argument("-o", "--output", default="output.png")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        scene = build_scene(args.scene, args.seed)
        settings = RenderSettings.from_quality(
            args.quality,
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            max_depth=args.depth,
            workers=args.workers,
            seed=args.seed,
        )
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    renderer = Renderer(settings)
    accumulated = renderer.render(scene.world, scene.camera(settings.aspect_ratio))
    pixels = TONE_MAPPERS[args.tone_mapping](accumulated, renderer.samples)

    try:
        save_image(pixels, args.output)
    except (OSError, ValueError) as e:
        logger.error("Could not write %s: %s", args.output, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
