"""Tests for Asset Synthesizer service."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from short_factory.core.exceptions import FootageNotFoundError, SpeechSynthesisError
from short_factory.models.schemas import (
    CaptionToken,
    FootageAsset,
    ImageScene,
    Orientation,
    RenderConfig,
    SearchScene,
    SpeechResult,
)
from short_factory.services.asset_synthesizer import AssetSynthesizer
from short_factory.storage.repository import MediaRepository


@pytest.fixture
def tts_client():
    """Mock TTS client returning two seconds of audio per scene."""
    client = MagicMock()
    client.generate.return_value = SpeechResult(audio=b"RIFF-audio", duration_seconds=2.0, audio_format="wav")
    return client


@pytest.fixture
def transcriber():
    """Mock transcriber that records whether its input file existed."""
    transcriber = MagicMock()
    transcriber.seen_paths = []

    def transcribe(path: Path):
        transcriber.seen_paths.append((path, path.exists()))
        return [CaptionToken(text="hello", start_ms=0, end_ms=400)]

    transcriber.transcribe.side_effect = transcribe
    return transcriber


@pytest.fixture
def footage_matcher():
    """Mock footage matcher that returns a new clip per call and snapshots the exclusion set."""
    matcher = MagicMock()
    matcher.excluded_snapshots = []

    def find_footage(search_terms, min_duration, exclude_ids, orientation=Orientation.PORTRAIT):
        matcher.excluded_snapshots.append(set(exclude_ids))
        clip_id = f"clip-{len(matcher.excluded_snapshots) - 1}"
        return FootageAsset(id=clip_id, url=f"https://videos.example.com/{clip_id}.mp4", width=1080, height=1920)

    matcher.find_footage.side_effect = find_footage
    return matcher


@pytest.fixture
def repository(settings, logger):
    return MediaRepository(settings, logger)


@pytest.fixture
def asset_synthesizer(settings, logger, tts_client, transcriber, footage_matcher, repository):
    """Create AssetSynthesizer instance for testing."""
    return AssetSynthesizer(settings, logger, tts_client, transcriber, footage_matcher, repository)


def _scenes(count: int) -> list[SearchScene]:
    return [SearchScene(text=f"Scene number {i}.", search_terms=[f"term{i}"]) for i in range(count)]


def test_padding_applies_to_last_scene_only(asset_synthesizer):
    """Test tail padding lengthens only the final scene."""
    assembled, total = asset_synthesizer.synthesize("job1", _scenes(3), RenderConfig(padding_back_ms=1500))

    assert [s.duration_seconds for s in assembled] == [2.0, 2.0, 3.5]
    assert total == pytest.approx(7.5)


def test_no_padding_keeps_speech_duration(asset_synthesizer):
    """Test durations equal speech length without padding."""
    assembled, total = asset_synthesizer.synthesize("job1", _scenes(2), RenderConfig())

    assert [s.duration_seconds for s in assembled] == [2.0, 2.0]
    assert total == pytest.approx(4.0)


def test_footage_is_never_reused_within_job(asset_synthesizer, footage_matcher):
    """Test each chosen clip joins the exclusion set for later scenes."""
    assembled, _ = asset_synthesizer.synthesize("job1", _scenes(3), RenderConfig())

    assert [s.footage.id for s in assembled] == ["clip-0", "clip-1", "clip-2"]
    assert footage_matcher.excluded_snapshots == [set(), {"clip-0"}, {"clip-0", "clip-1"}]


def test_footage_request_uses_scene_duration_and_orientation(asset_synthesizer, footage_matcher):
    """Test the matcher is asked for the scene's terms, duration and orientation."""
    asset_synthesizer.synthesize(
        "job1", _scenes(1), RenderConfig(padding_back_ms=500, orientation=Orientation.LANDSCAPE)
    )

    args, kwargs = footage_matcher.find_footage.call_args
    assert args[0] == ["term0"]
    assert args[1] == pytest.approx(2.5)
    assert kwargs["orientation"] == Orientation.LANDSCAPE


def test_transcription_copy_is_removed(asset_synthesizer, transcriber, settings):
    """Test only the render copy of each scene's audio remains in temp storage."""
    assembled, _ = asset_synthesizer.synthesize("job1", _scenes(2), RenderConfig())

    assert all(existed for _, existed in transcriber.seen_paths)
    assert all(not path.exists() for path, _ in transcriber.seen_paths)
    remaining = sorted(settings.temp_dir.iterdir())
    assert remaining == sorted(Path(s.audio_path) for s in assembled)
    for scene in assembled:
        assert Path(scene.audio_path).read_bytes() == b"RIFF-audio"
        assert Path(scene.audio_path).name.startswith("job1_")


def test_captions_are_attached(asset_synthesizer):
    """Test transcription tokens end up on the assembled scene."""
    assembled, _ = asset_synthesizer.synthesize("job1", _scenes(1), RenderConfig())

    assert [t.text for t in assembled[0].captions] == ["hello"]


def test_voice_defaults_to_settings(asset_synthesizer, tts_client, settings):
    """Test the configured default voice is used unless the job names one."""
    asset_synthesizer.synthesize("job1", _scenes(1), RenderConfig())
    assert tts_client.generate.call_args.args == ("Scene number 0.", settings.default_voice)

    asset_synthesizer.synthesize("job2", _scenes(1), RenderConfig(voice="nova"))
    assert tts_client.generate.call_args.args == ("Scene number 0.", "nova")


def test_failure_removes_written_audio(asset_synthesizer, footage_matcher, settings):
    """Test a failing scene aborts the job and leaves no temp files behind."""
    footage_matcher.find_footage.side_effect = [
        FootageAsset(id="clip-0", url="https://videos.example.com/clip-0.mp4", width=1080, height=1920),
        FootageNotFoundError("nothing"),
    ]

    with pytest.raises(FootageNotFoundError):
        asset_synthesizer.synthesize("job1", _scenes(3), RenderConfig())

    assert list(settings.temp_dir.iterdir()) == []


def test_speech_failure_aborts_job(asset_synthesizer, tts_client, footage_matcher):
    """Test a TTS failure stops synthesis before footage is searched."""
    tts_client.generate.side_effect = SpeechSynthesisError("provider down")

    with pytest.raises(SpeechSynthesisError):
        asset_synthesizer.synthesize("job1", _scenes(2), RenderConfig())

    footage_matcher.find_footage.assert_not_called()


def test_image_scene_uses_stored_image(asset_synthesizer, footage_matcher, settings):
    """Test image scenes resolve the stored file and never hit the footage search."""
    image_path = settings.images_dir / "cover.jpg"
    image_path.write_bytes(b"jpeg")
    scenes = [ImageScene(text="Look at this.", image_id="cover"), *_scenes(1)]

    assembled, _ = asset_synthesizer.synthesize("job1", scenes, RenderConfig())

    image_footage = assembled[0].footage
    assert image_footage.media_type == "image"
    assert image_footage.id == "image:cover"
    assert image_footage.url == str(image_path)
    assert footage_matcher.find_footage.call_count == 1
    assert footage_matcher.excluded_snapshots == [set()]


def test_missing_image_fails_scene(asset_synthesizer):
    """Test an unknown image id aborts the job."""
    with pytest.raises(FootageNotFoundError):
        asset_synthesizer.synthesize("job1", [ImageScene(text="Gone.", image_id="missing")], RenderConfig())


def test_release_ignores_missing_files(asset_synthesizer, tmp_path):
    """Test releasing already-removed files is harmless."""
    asset_synthesizer.release([tmp_path / "never-existed.wav"])
