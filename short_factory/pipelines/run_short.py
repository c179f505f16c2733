"""Command-line entrypoint - submit a short video job and wait for the result."""

import argparse
import json
import sys
from pathlib import Path

from short_factory.core.config import settings
from short_factory.core.exceptions import MusicCatalogError, ValidationError
from short_factory.core.logging_config import get_logger, setup_logging_from_settings
from short_factory.models.schemas import JobStatus
from short_factory.pipelines.create_short import build_job_queue
from short_factory.services.music_catalog import DEFAULT_MUSIC_CATALOG
from short_factory.services.music_selector import MusicSelector
from short_factory.services.tts_client import TTSClient


def load_request(path: Path) -> dict:
    """
    Read a job request file.

    The file holds {"scenes": [...], "config": {...}}; a bare list is taken as
    the scene list with default configuration.

    Raises:
        ValidationError: If the file holds any other JSON value
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, list):
        return {"scenes": data, "config": None}
    if not isinstance(data, dict):
        raise ValidationError(
            f"{path} must hold a JSON object or a list of scenes, got {type(data).__name__}",
            missing_fields=["scenes"],
        )
    return {"scenes": data.get("scenes", []), "config": data.get("config")}


def main():
    """Main entrypoint for the short video CLI."""
    parser = argparse.ArgumentParser(
        description=f"{settings.app_name} - narrated short videos from text scenes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {settings.app_version}",
    )
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="JSON file with the scenes and render config of the video to create",
    )
    parser.add_argument(
        "--list-voices",
        action="store_true",
        help="List the voices the configured TTS provider accepts",
    )
    parser.add_argument(
        "--list-music-tags",
        action="store_true",
        help="List the music moods available for the 'music' config option",
    )
    parser.add_argument(
        "--list-videos",
        action="store_true",
        help="List rendered videos",
    )
    parser.add_argument(
        "--status",
        type=str,
        default=None,
        metavar="VIDEO_ID",
        help="Show the status of a video",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Maximum seconds to wait for the video to render (default: no limit)",
    )

    args = parser.parse_args()

    if not any([args.input, args.list_voices, args.list_music_tags, args.list_videos, args.status]):
        parser.error("One of --input, --list-voices, --list-music-tags, --list-videos or --status is required")

    setup_logging_from_settings(settings)
    logger = get_logger(__name__)

    if args.list_voices:
        for voice in TTSClient(settings, logger).list_voices():
            print(voice)
        return 0

    if args.list_music_tags:
        selector = MusicSelector(settings, logger, DEFAULT_MUSIC_CATALOG)
        for mood in selector.available_moods():
            print(mood.value)
        return 0

    try:
        queue = build_job_queue(settings, logger)

        if args.list_videos:
            for summary in queue.list_videos():
                print(f"{summary.id}\t{summary.status.value}")
            return 0

        if args.status:
            print(queue.status(args.status).value)
            return 0

        request = load_request(Path(args.input))
        logger.info("=" * 60)
        logger.info(f"{settings.app_name} {settings.app_version} - Create Video")
        logger.info(f"Input: {args.input} ({len(request['scenes'])} scenes)")
        logger.info("=" * 60)

        job_id = queue.submit(request["scenes"], request["config"])
        print(job_id)

        if not queue.wait_until_idle(args.timeout):
            logger.warning(f"Timed out waiting for {job_id}; it keeps rendering in this process only")
            return 1

        status = queue.status(job_id)
        if status != JobStatus.READY:
            logger.error(f"Video {job_id} failed, see the log above for details")
            return 1

        logger.info(f"Video saved to: {queue.get_video_path(job_id)}")
        return 0

    except ValidationError as e:
        logger.error(f"Invalid input: {e}")
        for field in e.missing_fields:
            logger.error(f"  - {field}")
        return 1
    except MusicCatalogError as e:
        logger.error(f"Music catalog incomplete: {e}")
        logger.error(f"Add the missing track to {settings.music_dir} and retry")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read {args.input}: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
