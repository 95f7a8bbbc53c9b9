def test_import_dicebattle_package() -> None:
    import importlib

    module = importlib.import_module("dicebattle")
    assert module is not None


def test_import_rng_no_side_effects() -> None:
    from dicebattle.core.rng import RNG

    rng = RNG(42)
    value = rng.randint(0, 1)
    assert value in (0, 1)


def test_import_services_exposes_controller() -> None:
    from dicebattle.services import TurnController, create_turn_controller

    assert callable(create_turn_controller)
    assert TurnController.__name__ == "TurnController"
