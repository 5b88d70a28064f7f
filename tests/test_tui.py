from cloudops.cli.tui import _api_choice_title, select_api
from cloudops.core.providers import AZUREBLOB, VCLOUD


def test_api_choice_title_aligns_name_column():
    first = _api_choice_title(VCLOUD, id_width=9)
    second = _api_choice_title(AZUREBLOB, id_width=9)

    assert first.startswith("vcloud")
    assert second.startswith("azureblob")
    assert first.index("VCloud") == second.index("Microsoft")


def test_select_api_without_choices_returns_none():
    assert select_api([]) is None
