from pathlib import Path

import pytest

from app.components.configuration.configuration import Configuration


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    (tmp_path / "development.yaml").write_text(
        "MODEL_NAME: gemini-2.5-flash-lite\n"
        "MAX_IMAGE_BYTES: 5242880\n"
        "REQUEST_TIMEOUT_SECONDS: 0\n"
        "TRACE: yes\n",
        encoding="utf-8",
    )
    return tmp_path


def test_reads_values_from_environment_file(config_dir: Path) -> None:
    configuration = Configuration("development", str(config_dir))

    assert configuration.get_configuration("MODEL_NAME", str) == "gemini-2.5-flash-lite"
    assert configuration.get_configuration("MAX_IMAGE_BYTES", int) == 5242880
    assert configuration.get_environment() == "development"


def test_environment_variable_overrides_file(
    config_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("MODEL_NAME", "gemini-2.5-pro")
    monkeypatch.setenv("MAX_IMAGE_BYTES", "1024")

    configuration = Configuration("development", str(config_dir))

    assert configuration.get_configuration("MODEL_NAME", str) == "gemini-2.5-pro"
    assert configuration.get_configuration("MAX_IMAGE_BYTES", int) == 1024


def test_blank_environment_variable_falls_back_to_file(
    config_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("MODEL_NAME", "")

    configuration = Configuration("development", str(config_dir))

    assert configuration.get_configuration("MODEL_NAME", str) == "gemini-2.5-flash-lite"


def test_default_used_when_key_missing(config_dir: Path) -> None:
    configuration = Configuration("development", str(config_dir))

    assert configuration.get_configuration("PORT", int, default=8000) == 8000


def test_missing_key_without_default_raises(config_dir: Path) -> None:
    configuration = Configuration("development", str(config_dir))

    with pytest.raises(ValueError) as exc_info:
        configuration.get_configuration("PORT", int)

    assert "PORT" in str(exc_info.value)


def test_values_are_converted(config_dir: Path) -> None:
    configuration = Configuration("development", str(config_dir))

    assert configuration.get_configuration("REQUEST_TIMEOUT_SECONDS", float) == 0.0
    assert configuration.get_configuration("TRACE", bool) is True


def test_invalid_value_raises(
    config_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("MAX_IMAGE_BYTES", "five megabytes")

    with pytest.raises(ValueError) as exc_info:
        Configuration("development", str(config_dir))

    assert "MAX_IMAGE_BYTES" in str(exc_info.value)


def test_value_of_wrong_type_raises(config_dir: Path) -> None:
    configuration = Configuration("development", str(config_dir))

    with pytest.raises(ValueError) as exc_info:
        configuration.get_configuration("MODEL_NAME", int)

    assert "MODEL_NAME" in str(exc_info.value)


@pytest.mark.parametrize(
    ("value", "expected"), [("true", True), ("on", True), ("0", False), ("no", False)]
)
def test_boolean_words_are_understood(
    tmp_path: Path, value: str, expected: bool
) -> None:
    (tmp_path / "development.yaml").write_text(
        f"TRACE: '{value}'\n", encoding="utf-8"
    )

    configuration = Configuration("development", str(tmp_path))

    assert configuration.get_configuration("TRACE", bool) is expected


def test_environment_values_are_validated_as_declared_types(
    config_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "2.5")

    configuration = Configuration("development", str(config_dir))

    assert configuration.get_configuration("REQUEST_TIMEOUT_SECONDS", float) == 2.5


def test_missing_file_means_environment_only(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("MODEL_NAME", "from-env")

    configuration = Configuration("staging", str(tmp_path))

    assert configuration.get_configuration("MODEL_NAME", str) == "from-env"


def test_non_mapping_file_raises(tmp_path: Path) -> None:
    (tmp_path / "development.yaml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError):
        Configuration("development", str(tmp_path))
