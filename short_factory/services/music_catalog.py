"""Default background music catalog.

Loaded once at process start and injected into the MusicSelector. Track
boundaries skip silent intros so the music starts on the beat.
"""

from short_factory.models.schemas import MusicMood, MusicTrack


def _track(file: str, start: float, end: float, mood: MusicMood) -> MusicTrack:
    return MusicTrack(file=file, start_sec=start, end_sec=end, mood=mood)


DEFAULT_MUSIC_CATALOG: tuple[MusicTrack, ...] = (
    _track("Sly Sky - Telecasted.mp3", 0, 152, MusicMood.MELANCHOLIC),
    _track("No.2 Remembering Her - Esther Abrami.mp3", 2, 134, MusicMood.MELANCHOLIC),
    _track("Champion - Telecasted.mp3", 0, 142, MusicMood.CHILL),
    _track("Oh Please - Telecasted.mp3", 0, 154, MusicMood.CHILL),
    _track("Jetski - Telecasted.mp3", 0, 142, MusicMood.UNEASY),
    _track("Phantom - Density & Time.mp3", 0, 178, MusicMood.UNEASY),
    _track("On The Hunt - Andrew Langdon.mp3", 0, 95, MusicMood.UNEASY),
    _track("Name The Time And Place - Telecasted.mp3", 0, 142, MusicMood.EXCITED),
    _track("Delayed Baggage - Ryan Stasik.mp3", 3, 108, MusicMood.EUPHORIC),
    _track("Like It Loud - Dyalla.mp3", 4, 160, MusicMood.EUPHORIC),
    _track("Organic Guitar House - Dyalla.mp3", 2, 160, MusicMood.EUPHORIC),
    _track("Honey, I Dismembered The Kids - Ezra Lipp.mp3", 2, 144, MusicMood.DARK),
    _track("Night Hunt - Jimena Contreras.mp3", 0, 88, MusicMood.DARK),
    _track("Curse of the Witches - Jimena Contreras.mp3", 0, 102, MusicMood.DARK),
    _track("Restless Heart - Jimena Contreras.mp3", 0, 94, MusicMood.SAD),
    _track("Heartbeat Of The Wind - Asher Fulero.mp3", 0, 124, MusicMood.SAD),
    _track("Hopeless - Jimena Contreras.mp3", 0, 250, MusicMood.SAD),
    _track("Touch - Anno Domini Beats.mp3", 0, 165, MusicMood.HAPPY),
    _track("Cafecito por la Manana - Cumbia Deli.mp3", 0, 184, MusicMood.HAPPY),
    _track("Aurora on the Boulevard - National Sweetheart.mp3", 0, 130, MusicMood.HAPPY),
    _track("Buckle Up - Jeremy Korpas.mp3", 0, 128, MusicMood.ANGRY),
    _track("Twin Engines - Jeremy Korpas.mp3", 0, 120, MusicMood.ANGRY),
    _track("Hopeful - Nat Keefe.mp3", 0, 175, MusicMood.HOPEFUL),
    _track("Hopeful Freedom - Asher Fulero.mp3", 1, 172, MusicMood.HOPEFUL),
    _track("Crystaline - Quincas Moreira.mp3", 0, 140, MusicMood.CONTEMPLATIVE),
    _track("Final Soliloquy - Asher Fulero.mp3", 1, 178, MusicMood.CONTEMPLATIVE),
    _track("Seagull - Telecasted.mp3", 0, 123, MusicMood.FUNNY),
    _track("Banjo Doops - Joel Cummins.mp3", 0, 98, MusicMood.FUNNY),
    _track("Baby Animals Playing - Joel Cummins.mp3", 0, 124, MusicMood.FUNNY),
    _track("Sinister - Anno Domini Beats.mp3", 0, 215, MusicMood.DARK),
    _track("Traversing - Godmode.mp3", 0, 95, MusicMood.DARK),
)
