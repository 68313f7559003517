from wrapette.utils.logging import get, setup


def test_logger_levels():
    logger = get("debug")
    assert logger.level == 10  # DEBUG
    logger = get("error")
    assert logger.level == 40  # ERROR


def test_setup_installs_rich_handler():
    import logging
    from rich.logging import RichHandler

    logger = setup("warning")
    assert logger.name == "wrapette"
    assert logger.level == 30
    assert any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)
