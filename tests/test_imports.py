def test_import_wayfarer_package() -> None:
    import importlib

    module = importlib.import_module("wayfarer")
    assert module is not None
    assert module.__version__


def test_import_rng_no_side_effects() -> None:
    from wayfarer.core.rng import RNG

    rng = RNG(42)
    value = rng.randrange(2)
    assert value in (0, 1)


def test_import_cli_app() -> None:
    from wayfarer.presentation.cli import app

    assert callable(app.main)
