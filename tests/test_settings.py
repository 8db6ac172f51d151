import pytest

from cograph.settings import PipelineConfig, load_settings


def test_default_settings() -> None:
    cfg = load_settings()
    assert cfg.min_component_size == 5
    assert cfg.coefficient_threshold == pytest.approx(0.3)
    assert cfg.output_path == "graph.dot"


def test_custom_settings_file(tmp_path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("filter:\n  coefficient_threshold: 0.5\n", encoding="utf-8")
    cfg = load_settings(path)
    assert cfg.coefficient_threshold == pytest.approx(0.5)
    assert cfg.min_component_size == 5


def test_missing_settings_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml")


def test_override_ignores_none() -> None:
    cfg = PipelineConfig().override(coefficient_threshold=None, min_component_size=7)
    assert cfg.min_component_size == 7
    assert cfg.coefficient_threshold == pytest.approx(0.3)


@pytest.mark.parametrize(
    "kwargs",
    [{"min_component_size": 0}, {"coefficient_threshold": 1.2}],
)
def test_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        PipelineConfig(**kwargs)


@pytest.mark.parametrize("text", ["- 1\n- 2\n", "filter: [unclosed\n"])
def test_malformed_settings_file(tmp_path, text) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path)
