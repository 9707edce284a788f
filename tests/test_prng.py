import pytest

from effectsim.effects.prng import INT_RANGE_MAX, MockGen, draws


def test_next_follows_halve_or_triple_rule() -> None:
    value, gen = MockGen(6).next()
    assert value == 6
    assert gen == MockGen(3)
    value, gen = gen.next()
    assert value == 3
    assert gen == MockGen(10)


def test_negative_seed_emits_absolute_value() -> None:
    value, gen = MockGen(-3).next()
    assert value == 3
    assert gen == MockGen(-8)


def test_same_seed_same_sequence() -> None:
    a, _ = draws(MockGen(6171), 50)
    b, _ = draws(MockGen(6171), 50)
    assert a == b
    assert draws(MockGen(6), 5)[0] == (6, 3, 10, 5, 16)


def test_split_does_not_alias() -> None:
    left, right = MockGen(5).split()
    assert left == MockGen(5)
    assert right == MockGen(6)
    assert left.seed != right.seed


def test_random_between_is_bounded_and_order_insensitive() -> None:
    value, _ = MockGen(6171).random_between(1, 6)
    assert value == 4
    swapped, _ = MockGen(6171).random_between(6, 1)
    assert swapped == 4
    gen = MockGen(6171)
    for _ in range(100):
        value, gen = gen.random_between(-3, 3)
        assert -3 <= value <= 3


def test_random_between_floats() -> None:
    gen = MockGen(27)
    for _ in range(30):
        value, gen = gen.random_between(0.5, 1.5)
        assert 0.5 <= value <= 1.5


def test_random_int_in_range() -> None:
    assert MockGen().gen_range() == (0, INT_RANGE_MAX)
    value, _ = MockGen(6171).random_int()
    assert value == 6171


def test_draws_rejects_negative_count() -> None:
    with pytest.raises(ValueError):
        draws(MockGen(1), -1)
