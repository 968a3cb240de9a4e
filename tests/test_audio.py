from gridsnake.audio import CUES, SilentCues, synthesize


def test_cue_buffers_have_expected_length():
    for name, parts in CUES.items():
        samples = synthesize(parts, rate=8000)
        assert len(samples) == int(max(p[2] for p in parts) * 8000), name
        assert all(-32767 <= s <= 32767 for s in samples)


def test_tone_fades_out():
    samples = synthesize([(400, "square", 0.1, 0.5)], rate=8000)
    assert abs(samples[0]) > abs(samples[-1])


def test_silent_sink_accepts_everything():
    cues = SilentCues()
    for name in list(CUES) + ["unknown"]:
        cues.play(name)
    cues.pause_music()
    cues.resume_music()
    cues.stop()
