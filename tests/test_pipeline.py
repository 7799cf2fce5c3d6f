"""
Tests for the end-to-end mixing pipeline.
"""

import pytest
import numpy as np

from voiceover_mixer import (
    AudioSignal,
    DuckingMixer,
    InvalidInputError,
    MixParameters,
    MixResult,
    mix_with_ducking,
)
from voiceover_mixer.formats import WAV_HEADER_SIZE, decode_wav, peak_level
from voiceover_mixer.runtime.pipeline import (
    STATUS_DONE,
    STATUS_ENCODING,
    STATUS_MIXING,
    STATUS_NORMALIZING,
)
from voiceover_mixer.testing import create_speech_signal, create_test_signal


RATE = 8000


@pytest.fixture
def voice():
    """3 seconds of voice with one second of speech in the middle."""
    return create_speech_signal([(1.0, 2.0)], duration=3.0, sample_rate=RATE)


@pytest.fixture
def music():
    """2 seconds of stereo noise, shorter than the output."""
    return create_test_signal(2.0, RATE, channels=2, audio_type="noise", amplitude=0.3)


class TestMix:
    """Tests for DuckingMixer.mix()."""
    
    def test_result_layout(self, voice, music):
        result = DuckingMixer().mix(voice, music)
        
        assert isinstance(result, MixResult)
        assert result.sample_rate == RATE
        assert result.channels == 2
        assert result.signal.frames == 6 * RATE
        assert result.duration == pytest.approx(6.0)
    
    def test_normalized_to_target(self, voice, music):
        result = DuckingMixer().mix(voice, music)
        
        assert peak_level(result.signal) == pytest.approx(0.98, abs=1e-6)
    
    def test_custom_target_peak(self, voice, music):
        params = MixParameters(normalization_target_peak=0.5)
        
        result = DuckingMixer(params).mix(voice, music)
        
        assert peak_level(result.signal) == pytest.approx(0.5, abs=1e-6)
    
    def test_wav_payload(self, voice, music):
        result = DuckingMixer().mix(voice, music)
        
        assert result.wav[:4] == b"RIFF"
        assert len(result.wav) == WAV_HEADER_SIZE + 6 * RATE * 2 * 2
        
        decoded = decode_wav(result.wav)
        assert decoded.channels == 2
        assert decoded.frames == 6 * RATE
    
    def test_segments_detected(self, voice, music):
        result = DuckingMixer().mix(voice, music)
        
        assert len(result.segments) == 1
        assert result.segments[0].start == pytest.approx(1.0, abs=0.2)
        assert result.segments[0].end == pytest.approx(2.0, abs=0.2)
    
    def test_envelope_covers_output(self, voice, music):
        result = DuckingMixer().mix(voice, music)
        
        assert result.envelope[-1].time == pytest.approx(6.0)
        assert result.envelope.is_continuous()
    
    def test_status_order(self, voice, music):
        messages = []
        
        DuckingMixer(on_status=messages.append).mix(voice, music)
        
        assert messages == [
            STATUS_MIXING,
            STATUS_NORMALIZING,
            STATUS_ENCODING,
            STATUS_DONE,
        ]
    
    def test_raw_peak_recorded(self):
        voice = create_test_signal(1.0, RATE, audio_type="dc", amplitude=0.5)
        music = AudioSignal.silence(1, RATE, RATE)
        
        result = DuckingMixer().mix(voice, music)
        
        assert result.raw_peak == pytest.approx(0.7, abs=1e-6)
    
    def test_inputs_not_mutated(self, voice, music):
        voice_before = voice.samples.copy()
        music_before = music.samples.copy()
        
        DuckingMixer().mix(voice, music)
        
        np.testing.assert_array_equal(voice.samples, voice_before)
        np.testing.assert_array_equal(music.samples, music_before)


class TestEdgeCases:
    """Degenerate but valid inputs."""
    
    def test_silent_inputs(self):
        voice = AudioSignal.silence(1, RATE, RATE)
        music = AudioSignal.silence(2, RATE, RATE)
        
        result = DuckingMixer().mix(voice, music)
        
        assert result.segments == []
        assert peak_level(result.signal) == 0.0
        assert not np.any(decode_wav(result.wav).samples)
    
    def test_music_resampled_to_voice_rate(self, voice):
        music = create_test_signal(1.0, 16000, audio_type="tone", amplitude=0.3)
        
        result = DuckingMixer().mix(voice, music)
        
        assert result.sample_rate == RATE
        assert result.signal.frames == 6 * RATE
    
    def test_one_frame_music_resampled(self, voice):
        """A one-frame clip at a higher rate still loops after resampling."""
        music = AudioSignal(np.array([0.5]), 16000)
        
        result = DuckingMixer().mix(voice, music)
        
        assert result.signal.frames == 6 * RATE
        assert peak_level(result.signal) == pytest.approx(0.98, abs=1e-6)
    
    def test_inputs_validated_once(self, voice, music, monkeypatch):
        """Each input is checked once per mix, not again by every stage."""
        calls = []
        check = AudioSignal.validate
        
        def counting(signal, name="signal"):
            calls.append(name)
            return check(signal, name)
        
        monkeypatch.setattr(AudioSignal, "validate", counting)
        DuckingMixer().mix(voice, music)
        
        assert sorted(calls) == ["music", "voice"]
    
    def test_empty_music_rejected(self, voice):
        music = AudioSignal(np.zeros(0), RATE)
        
        with pytest.raises(InvalidInputError, match="music"):
            DuckingMixer().mix(voice, music)
    
    def test_empty_voice_rejected(self, music):
        voice = AudioSignal(np.zeros(0), RATE)
        
        with pytest.raises(InvalidInputError, match="voice"):
            DuckingMixer().mix(voice, music)
    
    def test_no_status_after_failure(self, voice):
        messages = []
        music = AudioSignal(np.zeros(0), RATE)
        
        with pytest.raises(InvalidInputError):
            DuckingMixer(on_status=messages.append).mix(voice, music)
        
        assert messages == []


class TestAnalyzeAndRender:
    """Tests for the partial pipeline entry points."""
    
    def test_analyze(self, voice):
        segments, envelope = DuckingMixer().analyze(voice)
        
        assert len(segments) == 1
        assert envelope[-1].time == pytest.approx(voice.duration + 3.0)
        assert envelope[-1].value == pytest.approx(0.001)
    
    def test_analyze_custom_padding(self, voice):
        params = MixParameters(post_speech_padding=1.0)
        
        _, envelope = DuckingMixer(params).analyze(voice)
        
        assert envelope[-1].time == pytest.approx(4.0)
    
    def test_late_speech_ducked(self):
        """Speech in the last seconds of the voice is ducked under the fade."""
        voice = create_speech_signal([(2.5, 3.9)], duration=4.0, sample_rate=RATE)
    
        segments, envelope = DuckingMixer().analyze(voice)
    
        assert len(segments) == 1
        for t in np.linspace(segments[0].start, segments[0].end, 20):
            assert envelope.value_at(t) <= 0.2 + 1e-9
        assert envelope.is_continuous()
    
    def test_short_voice_ducked(self):
        """A voice shorter than two seconds still ducks the music."""
        voice = create_speech_signal([(0.5, 1.5)], duration=1.8, sample_rate=RATE)
        music = create_test_signal(1.0, RATE, audio_type="dc", amplitude=0.5)
    
        result = DuckingMixer().mix(voice, music)
    
        segment = result.segments[0]
        middle = (segment.start + segment.end) / 2
        assert result.envelope.value_at(middle) <= 0.2 + 1e-9
    
    def test_render_not_normalized(self):
        voice = create_test_signal(1.0, RATE, audio_type="dc", amplitude=0.5)
        music = AudioSignal.silence(1, RATE, RATE)
        
        rendered = DuckingMixer().render(voice, music)
        
        assert peak_level(rendered) == pytest.approx(0.7, abs=1e-6)


class TestMixWithDucking:
    """Tests for the one-call helper."""
    
    def test_returns_result(self, voice, music):
        result = mix_with_ducking(voice, music)
        
        assert isinstance(result, MixResult)
        assert result.wav[:4] == b"RIFF"
    
    def test_params_forwarded(self, voice, music):
        params = MixParameters(post_speech_padding=0.5)
        
        result = mix_with_ducking(voice, music, params)
        
        assert result.signal.frames == int(3.5 * RATE)
