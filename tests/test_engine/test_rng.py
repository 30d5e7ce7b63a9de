"""Tests for the seeded random streams."""

from sceneforge.engine.rng import Mulberry32, fnv1a, layout_seed, micro_seed


def test_fnv1a_known_values():
    assert fnv1a("") == 2166136261
    assert fnv1a("a") == 0xE40C292C


def test_fnv1a_uses_utf16_code_units():
    # One code unit above 0xFF hashes as a single 16-bit value
    expected = ((2166136261 ^ 0x652F) * 16777619) & 0xFFFFFFFF
    assert fnv1a("\u652f") == expected


def test_mulberry32_is_deterministic():
    a = Mulberry32(42)
    b = Mulberry32(42)
    assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]


def test_mulberry32_range():
    rand = Mulberry32(7)
    for _ in range(500):
        x = rand.random()
        assert 0.0 <= x < 1.0


def test_randint_inclusive_and_order_free():
    rand = Mulberry32(3)
    seen = {rand.randint(5, 1) for _ in range(400)}
    assert seen == {1, 2, 3, 4, 5}


def test_pick_some_distinct():
    rand = Mulberry32(11)
    items = ["a", "b", "c", "d", "e"]
    picked = rand.pick_some(items, 3)
    assert len(picked) == 3
    assert len(set(picked)) == 3
    assert set(picked) <= set(items)


def test_pick_some_caps_at_pool_size():
    rand = Mulberry32(11)
    assert sorted(rand.pick_some(["x", "y"], 5)) == ["x", "y"]
    assert rand.pick_some([], 2) == []


def test_pick_one_empty():
    assert Mulberry32(1).pick_one([]) is None


def test_layout_seed_depends_on_domain_and_style():
    base = layout_seed(1, "payments", "glass")
    assert base == (1 ^ fnv1a("payments:glass"))
    assert layout_seed(1, "payments", "paper") != base
    assert layout_seed(1, "portal", "glass") != base


def test_micro_seed_separate_from_layout_stream():
    assert micro_seed(1) == 1 ^ 0x9E3779B9
    assert micro_seed(1) != layout_seed(1, "payments", "glass")
