import numpy as np
import wave
import os

from config.config import CONFIG

SAMPLE_RATE = 22050


def write_wav_file(filename, data, sample_rate=SAMPLE_RATE):
    """Write numpy array data to a WAV file."""
    # Ensure data is 16-bit integers
    data = np.clip(data, -32767, 32767).astype(np.int16)

    with wave.open(filename, 'w') as wav_file:
        wav_file.setnchannels(1)  # Mono
        wav_file.setsampwidth(2)  # 2 bytes per sample (16-bit)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(data.tobytes())


def _to_pcm(signal):
    return (signal * 32767).astype(np.int16)


def generate_catch_sound():
    """Short soft thump of a ball landing in the palm."""
    duration = 0.12
    t = np.linspace(0, duration, int(duration * SAMPLE_RATE))

    freq = 180
    signal = np.sin(2 * np.pi * freq * t) * 0.5
    # A little noise for the "slap"
    signal += np.random.default_rng(7).uniform(-1, 1, t.size) * 0.08

    envelope = np.exp(-30 * t)
    return _to_pcm(signal * envelope), SAMPLE_RATE


def generate_throw_sound():
    """Rising chirp for a successful throw."""
    duration = 0.25
    t = np.linspace(0, duration, int(duration * SAMPLE_RATE))

    # Sweep from 440 Hz to 1320 Hz
    start, end = 440, 1320
    phase = 2 * np.pi * (start * t + (end - start) * t ** 2 / (2 * duration))
    signal = np.sin(phase) * 0.3

    envelope = np.exp(-6 * t)
    return _to_pcm(signal * envelope), SAMPLE_RATE


def generate_drop_sound():
    """Falling tone when a hand loses its balls."""
    duration = 0.4
    t = np.linspace(0, duration, int(duration * SAMPLE_RATE))

    start, end = 400, 120
    phase = 2 * np.pi * (start * t + (end - start) * t ** 2 / (2 * duration))
    signal = np.sin(phase) * 0.35
    # Add some buzzing
    signal += np.sin(3 * phase) * 0.08

    envelope = np.exp(-4 * t)
    return _to_pcm(signal * envelope), SAMPLE_RATE


GENERATORS = {
    'catch': generate_catch_sound,
    'throw': generate_throw_sound,
    'drop': generate_drop_sound,
}


def main():
    """Generate all sound files."""
    print("Generating game sounds...")

    for name, sound_file in CONFIG['sound_files'].items():
        directory = os.path.dirname(sound_file)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        data, sr = GENERATORS[name]()
        write_wav_file(sound_file, data, sr)
        print(f"- {sound_file}")

    print("Game sounds generated successfully!")


if __name__ == "__main__":
    main()
