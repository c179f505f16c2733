"""Video Renderer - composites a CompositionDescriptor into a final .mp4 video."""

import shutil
from pathlib import Path
from typing import Any, Optional

import numpy as np
import requests
from moviepy import (
    AudioFileClip,
    CompositeAudioClip,
    CompositeVideoClip,
    ImageClip,
    VideoFileClip,
    afx,
    concatenate_videoclips,
    vfx,
)
from PIL import Image, ImageColor, ImageDraw, ImageFont

from short_factory.core.config import Settings
from short_factory.core.exceptions import RenderError, StorageCleanupError
from short_factory.models.schemas import (
    AssembledScene,
    CaptionPage,
    CaptionPosition,
    CompositionDescriptor,
    MusicVolume,
)
from short_factory.services.caption_paginator import CaptionPaginator
from short_factory.utils.io_utils import remove_temp_file, temp_file_path

# Image scenes zoom in by this factor over their duration
KEN_BURNS_ZOOM = 1.2


def calculate_music_volume(level: MusicVolume = MusicVolume.HIGH) -> float:
    """Map a music volume level to a gain factor."""
    return {
        MusicVolume.MUTED: 0.0,
        MusicVolume.LOW: 0.2,
        MusicVolume.MEDIUM: 0.45,
        MusicVolume.HIGH: 0.7,
    }.get(level, 0.7)


class MoviePyRenderer:
    """Rendering engine that composites footage, narration, captions and music with MoviePy."""

    def __init__(self, settings: Settings, logger: Any, paginator: Optional[CaptionPaginator] = None):
        """
        Initialize video renderer.

        Args:
            settings: Application settings
            logger: Logger instance
            paginator: Caption paginator (defaults to the configured layout)
        """
        self.settings = settings
        self.logger = logger
        self.paginator = paginator or CaptionPaginator.from_settings(settings)
        self.temp_dir = settings.temp_dir
        self.videos_dir = settings.videos_dir

    def render(self, composition: CompositionDescriptor, output_id: str) -> Path:
        """
        Main entrypoint: render a composition into videos/<output_id>.mp4.

        The video is written to transient storage first and moved into place
        only once complete, so a failed render never leaves an artifact behind.

        Args:
            composition: What to render
            output_id: Artifact id

        Returns:
            Path to the final .mp4 video file

        Raises:
            RenderError: If any part of rendering fails
        """
        self.logger.info("=" * 60)
        self.logger.info(f"Starting video rendering: {output_id}")
        self.logger.info(f"Scenes: {len(composition.scenes)}, duration: {composition.duration_seconds:.2f}s")
        self.logger.info("=" * 60)

        downloads: list[Path] = []
        clips: list[Any] = []
        partial_path = temp_file_path(self.temp_dir, f"{output_id}_render", ".mp4")
        try:
            output_path = self._compose(composition, output_id, partial_path, downloads, clips)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Rendering {output_id} failed: {e}") from e
        finally:
            for clip in clips:
                try:
                    clip.close()
                except Exception as e:
                    self.logger.warning(f"Error closing clip: {e}")
            for path in [*downloads, partial_path]:
                try:
                    remove_temp_file(path)
                except StorageCleanupError as e:
                    self.logger.warning(str(e))

        self.logger.info(f"Successfully created video: {output_path}")
        return output_path

    def _compose(
        self,
        composition: CompositionDescriptor,
        output_id: str,
        partial_path: Path,
        downloads: list[Path],
        clips: list[Any],
    ) -> Path:
        width, height = composition.orientation.dimensions
        total = composition.duration_seconds

        scene_clips = []
        overlay_clips = []
        audio_clips = []
        offset = 0.0
        for index, scene in enumerate(composition.scenes):
            visual = self._scene_visual(scene, width, height, f"{output_id}_{index}", downloads)
            clips.append(visual)
            scene_clips.append(visual)

            narration = AudioFileClip(scene.audio_path)
            clips.append(narration)
            audio_clips.append(narration.with_start(offset))

            overlay_clips.extend(self._caption_clips(scene, offset, composition, width, height))
            offset += scene.duration_seconds

        if not scene_clips:
            raise RenderError("Composition has no scenes")

        music = self._music_clip(composition)
        if music is not None:
            clips.append(music)
            audio_clips.append(music)

        video = concatenate_videoclips(scene_clips, method="compose")
        final = (
            CompositeVideoClip([video, *overlay_clips], size=(width, height))
            .with_duration(total)
            .with_audio(CompositeAudioClip(audio_clips).with_duration(total))
        )
        clips.extend([video, final])

        self.logger.info(f"Rendering video to: {partial_path}...")
        final.write_videofile(
            str(partial_path),
            fps=self.settings.render_fps,
            codec="libx264",
            audio_codec="aac",
            preset="medium",
            logger=None,
        )

        output_path = self.videos_dir / f"{output_id}.mp4"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(partial_path), str(output_path))
        return output_path

    def _scene_visual(
        self,
        scene: AssembledScene,
        width: int,
        height: int,
        prefix: str,
        downloads: list[Path],
    ) -> Any:
        duration = scene.duration_seconds
        if scene.footage.media_type == "image":
            return self._image_clip(Path(scene.footage.url), duration, width, height)

        local_path = self._download(scene.footage.url, prefix)
        downloads.append(local_path)
        clip = VideoFileClip(str(local_path), audio=False)
        if clip.duration >= duration:
            clip = clip.subclipped(0, duration)
        else:
            clip = clip.with_effects([vfx.Loop(duration=duration)])
        if (clip.w, clip.h) != (width, height):
            clip = clip.resized(new_size=(width, height))
        return clip

    def _image_clip(self, image_path: Path, duration: float, width: int, height: int) -> Any:
        """Still image scaled to cover the frame with a slow zoom in."""
        image = ImageClip(str(image_path)).with_duration(duration)
        cover = max(width / image.w, height / image.h)
        image = image.resized(lambda t: cover * (1 + (KEN_BURNS_ZOOM - 1) * t / max(duration, 0.001)))
        return CompositeVideoClip([image.with_position("center")], size=(width, height)).with_duration(duration)

    def _download(self, url: str, prefix: str) -> Path:
        target = temp_file_path(self.temp_dir, f"{prefix}_footage", ".mp4")
        self.logger.debug(f"Downloading footage: {url}")
        with requests.get(url, stream=True, timeout=self.settings.http_timeout_seconds) as response:
            response.raise_for_status()
            with open(target, "wb") as f:
                for chunk in response.iter_content(chunk_size=1 << 20):
                    f.write(chunk)
        return target

    def _music_clip(self, composition: CompositionDescriptor) -> Optional[Any]:
        volume = calculate_music_volume(composition.music_volume)
        if volume == 0.0:
            return None

        track = composition.music
        music = AudioFileClip(composition.music_path)
        end = min(track.end_sec, music.duration)
        if end > track.start_sec:
            music = music.subclipped(track.start_sec, end)
        return music.with_effects([afx.AudioLoop(duration=composition.duration_seconds)]).with_volume_scaled(volume)

    def _caption_clips(
        self,
        scene: AssembledScene,
        offset: float,
        composition: CompositionDescriptor,
        width: int,
        height: int,
    ) -> list[Any]:
        clips = []
        for page in self.paginator.paginate(scene.captions):
            frame = self.draw_caption_page(page, composition.caption_background_color, width)
            start = offset + page.start_ms / 1000
            duration = max((page.end_ms - page.start_ms) / 1000, 1 / self.settings.render_fps)
            clip = (
                ImageClip(frame)
                .with_start(start)
                .with_duration(duration)
                .with_position(("center", self._caption_y(composition.caption_position, frame.shape[0], height)))
            )
            clips.append(clip)
        return clips

    @staticmethod
    def _caption_y(position: CaptionPosition, caption_height: int, frame_height: int) -> int:
        if position == CaptionPosition.TOP:
            return int(frame_height * 0.1)
        if position == CaptionPosition.BOTTOM:
            return int(frame_height * 0.8) - caption_height
        return (frame_height - caption_height) // 2

    def draw_caption_page(self, page: CaptionPage, background_color: str, frame_width: int) -> np.ndarray:
        """
        Draw one caption page as an RGBA image.

        Args:
            page: Page to draw
            background_color: CSS colour for the box behind the text
            frame_width: Video width, the box never exceeds it

        Returns:
            RGBA pixel array
        """
        font = self._load_font()
        padding = self.settings.caption_font_size // 3
        line_texts = [line.text.upper() for line in page.lines]

        scratch = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
        boxes = [scratch.textbbox((0, 0), text, font=font) for text in line_texts]
        line_height = max((box[3] - box[1] for box in boxes), default=0) + padding // 2
        text_width = max((box[2] - box[0] for box in boxes), default=0)

        box_width = min(text_width + 2 * padding, frame_width)
        box_height = line_height * len(line_texts) + 2 * padding

        try:
            fill = ImageColor.getrgb(background_color)
        except ValueError:
            self.logger.warning(f"Invalid caption background colour '{background_color}', using blue")
            fill = ImageColor.getrgb("blue")

        image = Image.new("RGBA", (box_width, box_height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(image)
        draw.rounded_rectangle((0, 0, box_width - 1, box_height - 1), radius=padding, fill=fill)
        for i, (text, box) in enumerate(zip(line_texts, boxes)):
            x = (box_width - (box[2] - box[0])) // 2 - box[0]
            y = padding + i * line_height - box[1]
            draw.text((x, y), text, font=font, fill="white", stroke_width=2, stroke_fill="black")

        return np.array(image)

    def _load_font(self) -> Any:
        size = self.settings.caption_font_size
        if self.settings.caption_font_path:
            return ImageFont.truetype(self.settings.caption_font_path, size)
        return ImageFont.load_default(size=size)
