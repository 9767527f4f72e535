import logging

import main
from data import UiMode
from dispatcher import Action


def test_cli_overrides_config(tmp_path):
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text('log_level = "ERROR"\n')
    args = main.parse_args(["--config", str(cfg_path), "--data", str(tmp_path / "d.toml"),
                            "--log-level", "debug"])
    cfg = main.resolve_config(args)
    assert cfg.data_path == tmp_path / "d.toml"
    assert cfg.log_level == "DEBUG"


def test_bad_config_falls_back_to_defaults(tmp_path):
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text('log_level = "LOUD"\n')
    cfg = main.resolve_config(main.parse_args(["--config", str(cfg_path)]))
    assert cfg.log_level == "INFO"


def test_build_persists_to_data_file(qapp, tmp_path, caplog):
    cfg = main.resolve_config(main.parse_args([
        "--config", str(tmp_path / "none.toml"), "--data", str(tmp_path / "d.toml"),
    ]))
    store, dispatcher, window = main.build(cfg)
    try:
        assert store.ui_mode == UiMode.LOADING
        store.finish_loading()
        with caplog.at_level(logging.DEBUG, logger="main"):
            dispatcher.dispatch(Action.ADD_LIST, {"name": "Groceries"})
        assert "ADD_LIST" in caplog.text
    finally:
        window.close()

    store2, _dispatcher, window2 = main.build(cfg, loading=False)
    try:
        assert [lst.name for lst in store2.lists] == ["Groceries"]
        assert window2.page.objectName() == "list-page"
    finally:
        window2.close()
