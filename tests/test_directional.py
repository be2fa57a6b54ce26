from iex_predictor.core.directional import DirectionalStats


def test_direction_matches_are_counted() -> None:
    stats = DirectionalStats()
    assert stats.record(3.0, 3.5, 3.2) is True
    assert stats.record(3.5, 3.1, 3.6) is False
    assert stats.record(3.1, 3.1, 3.1) is True
    assert stats.record(3.1, 3.1, 3.2) is False

    assert (stats.n_predictions, stats.n_correct) == (4, 2)
    assert stats.accuracy == 50.0


def test_accuracy_without_checks_is_zero() -> None:
    assert DirectionalStats().accuracy == 0.0
