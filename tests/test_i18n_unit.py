from core.desktop.interface.constants import LANG_PACK
from core.desktop.interface.i18n import effective_lang, translate


def test_tests_run_in_english():
    assert effective_lang() == "en"
    assert translate("STATUS_CREATED") == "Task captured"


def test_env_override_selects_language(monkeypatch):
    monkeypatch.setenv("TASK_ITEM_LANG", "ru")
    assert translate("STATUS_CREATED") == "Задача добавлена"


def test_unknown_env_language_falls_back(monkeypatch):
    monkeypatch.setenv("TASK_ITEM_LANG", "xx")
    assert effective_lang() == "en"


def test_missing_translations_backfilled_from_english():
    assert LANG_PACK["ru"]["FOOTER_HINTS"] == LANG_PACK["en"]["FOOTER_HINTS"]
    assert set(LANG_PACK["en"]) <= set(LANG_PACK["ru"])


def test_unknown_key_and_bad_format_degrade_gracefully():
    assert translate("NO_SUCH_KEY") == "NO_SUCH_KEY"
    assert translate("STATUS_STORE_ERROR") == LANG_PACK["en"]["STATUS_STORE_ERROR"]
    assert translate("STATUS_STORE_ERROR", error="disk full") == "Store error: disk full"


def test_configured_language_read_once(monkeypatch):
    import core.desktop.interface.i18n as i18n

    reads = []

    def fake_get_user_lang():
        reads.append(1)
        return "ru"

    monkeypatch.setattr(i18n, "get_user_lang", fake_get_user_lang)
    monkeypatch.delenv("TASK_ITEM_LANG", raising=False)
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    i18n.configured_lang.cache_clear()
    try:
        for _ in range(5):
            assert translate("STATUS_CREATED") == "Задача добавлена"
        assert reads == [1]
        i18n.configured_lang.cache_clear()
        translate("STATUS_CREATED")
        assert reads == [1, 1]
    finally:
        i18n.configured_lang.cache_clear()
