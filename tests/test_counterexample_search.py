import pytest

from bounded import BoundedInteger
from bounds import TINY
from validation import counterexample_search as search


class TruncatingFMod(BoundedInteger, bounds=TINY):
    """f_mod that keeps the sign of the dividend."""

    @classmethod
    def f_mod(cls, a, b):
        return cls.t_mod(a, b)


class TestRunSearch:
    def test_default_matrix_passes(self, verify_settings):
        report = search.run_search(search.default_configurations(), verify_settings)
        assert report.passed
        assert report.checks_run > 0
        names = [name for name, _ in search.default_configurations()]
        assert "ERROR INT32 (sampled)" in names
        assert "WRAP  UINT16 (sampled)" in names
        assert "No counterexamples found" in report.summary()

    def test_broken_configuration_reported(self, verify_settings):
        report = search.run_search([("truncating f_mod", TruncatingFMod)], verify_settings)
        assert not report.passed
        laws = {cx.law for cx in report.counterexamples}
        assert "f_mod_remainder" in laws
        assert "f_mod_sign" in laws
        assert all(cx.configuration == "truncating f_mod" for cx in report.counterexamples)
        assert "Inputs:" in report.summary()


class TestMain:
    @pytest.fixture(autouse=True)
    def quiet(self, monkeypatch, verify_settings):
        monkeypatch.setattr(search, "get_settings", lambda: verify_settings)
        monkeypatch.setattr(search, "setup_logging", lambda *args, **kwargs: None)

    def test_success(self, capsys):
        search.main()
        assert "Counterexample Search Report" in capsys.readouterr().out

    def test_failure_exits_nonzero(self, monkeypatch):
        monkeypatch.setattr(
            search, "default_configurations", lambda: [("broken", TruncatingFMod)]
        )
        with pytest.raises(SystemExit) as exc_info:
            search.main()
        assert exc_info.value.code == 1
