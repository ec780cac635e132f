import pytest
from pydantic import ValidationError

from nrdp_reporter.config import ConfigurationError, MetricThresholds, Settings, get_settings
from nrdp_reporter.models.metric import MetricMode


@pytest.fixture
def nrdp_env(monkeypatch):
    monkeypatch.setenv("NRDP_URL", "http://nagios.local/nrdp/")
    monkeypatch.setenv("NRDP_TOKEN", "s3cret")


def test_settings_from_env_defaults(nrdp_env):
    settings = Settings.from_env()

    assert settings.nrdp_url == "http://nagios.local/nrdp/"
    assert settings.nrdp_token == "s3cret"
    assert settings.hostname is None
    assert settings.include_performance_data is True
    assert settings.report_all_groups is True
    assert all(spec.mode is MetricMode.DISABLED for spec in settings.metric_specs())


def test_get_settings_is_cached(nrdp_env):
    get_settings.cache_clear()
    s1 = get_settings()
    s2 = get_settings()
    assert s1 is s2
    assert s1.nrdp_url == "http://nagios.local/nrdp/"
    get_settings.cache_clear()


def test_toggles_and_hostname_from_env(nrdp_env, monkeypatch):
    monkeypatch.setenv("NRDP_HOSTNAME", "nifi-01")
    monkeypatch.setenv("NRDP_PERFORMANCE_DATA", "disabled")
    monkeypatch.setenv("NRDP_REPORT_ALL_GROUPS", "Disabled")

    settings = Settings.from_env()
    assert settings.hostname == "nifi-01"
    assert settings.include_performance_data is False
    assert settings.report_all_groups is False


def test_count_and_data_size_thresholds_are_parsed(nrdp_env, monkeypatch):
    monkeypatch.setenv("FLOWFILES_QUEUED", "Alerting")
    monkeypatch.setenv("FLOWFILES_QUEUED_WARN", "100")
    monkeypatch.setenv("FLOWFILES_QUEUED_CRIT", "200")
    monkeypatch.setenv("BYTES_QUEUED", "alerting")
    monkeypatch.setenv("BYTES_QUEUED_WARN", "1 MB")
    monkeypatch.setenv("BYTES_QUEUED_CRIT", "1.5 GB")
    monkeypatch.setenv("BYTES_READ", "Reporting")

    specs = {spec.definition.key: spec for spec in Settings.from_env().metric_specs()}

    assert specs["flowfiles_queued"].mode is MetricMode.ALERTING
    assert specs["flowfiles_queued"].warning == 100
    assert specs["flowfiles_queued"].critical == 200
    assert specs["bytes_queued"].warning == 1024 * 1024
    assert specs["bytes_queued"].critical == 1.5 * 1024 ** 3
    assert specs["bytes_read"].mode is MetricMode.REPORTING
    assert specs["bytes_read"].warning is None


def test_metric_specs_follow_declaration_order(nrdp_env):
    keys = [spec.definition.key for spec in Settings.from_env().metric_specs()]
    assert keys == [
        "active_thread_count",
        "flowfiles_queued",
        "bytes_queued",
        "bytes_in",
        "bytes_out",
        "flowfiles_in",
        "flowfiles_out",
        "bytes_read",
        "bytes_written",
    ]


def test_alerting_without_thresholds_is_rejected(nrdp_env, monkeypatch):
    monkeypatch.setenv("ACTIVE_THREAD_COUNT", "Alerting")
    monkeypatch.setenv("ACTIVE_THREAD_COUNT_WARN", "10")

    with pytest.raises(ConfigurationError) as excinfo:
        Settings.from_env()
    assert "ACTIVE_THREAD_COUNT" in str(excinfo.value)


def test_missing_url_or_token_is_rejected(monkeypatch):
    monkeypatch.delenv("NRDP_URL", raising=False)
    monkeypatch.setenv("NRDP_TOKEN", "s3cret")

    with pytest.raises(ConfigurationError):
        Settings.from_env()


@pytest.mark.parametrize(
    "name, value",
    [
        ("FLOWFILES_IN", "Sometimes"),
        ("NRDP_PERFORMANCE_DATA", "yes please"),
        ("NRDP_TIMEOUT_SECONDS", "soon"),
    ],
)
def test_invalid_values_raise_configuration_error(nrdp_env, monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        Settings.from_env()


def test_invalid_thresholds_raise_configuration_error(nrdp_env, monkeypatch):
    monkeypatch.setenv("FLOWFILES_OUT", "Alerting")
    monkeypatch.setenv("FLOWFILES_OUT_WARN", "ten")
    monkeypatch.setenv("FLOWFILES_OUT_CRIT", "20")

    with pytest.raises(ConfigurationError):
        Settings.from_env()

    monkeypatch.setenv("FLOWFILES_OUT_WARN", "10")
    monkeypatch.setenv("BYTES_OUT", "Alerting")
    monkeypatch.setenv("BYTES_OUT_WARN", "10 parsecs")
    monkeypatch.setenv("BYTES_OUT_CRIT", "20 MB")

    with pytest.raises(ConfigurationError):
        Settings.from_env()


def test_metric_thresholds_model_validation():
    with pytest.raises(ValidationError):
        MetricThresholds(mode=MetricMode.ALERTING, warning=1)
    with pytest.raises(ValidationError):
        MetricThresholds(mode=MetricMode.ALERTING, warning=-1, critical=5)

    reporting = MetricThresholds(mode=MetricMode.REPORTING)
    assert reporting.warning is None and reporting.critical is None


def test_unknown_metric_keys_are_rejected():
    with pytest.raises(ValidationError):
        Settings(
            nrdp_url="http://nagios.local/nrdp/",
            nrdp_token="s3cret",
            metrics={"heap_usage": MetricThresholds(mode=MetricMode.REPORTING)},
        )
