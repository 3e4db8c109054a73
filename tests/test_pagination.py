import random

import pytest

from modulehub.catalog.pagination import PaginationWindow


def test_initial_reveal_is_one_page():
    assert PaginationWindow(20).revealed == 6


def test_initial_reveal_capped_by_total():
    window = PaginationWindow(4)

    assert window.revealed == 4
    assert not window.has_more


def test_advance_adds_a_page_capped_at_total():
    window = PaginationWindow(14)

    assert window.advance() == 12
    assert window.has_more
    assert window.advance() == 14
    assert not window.has_more
    assert window.advance() == 14


def test_reset_restores_initial_reveal():
    window = PaginationWindow(30)
    window.advance()
    window.advance()

    assert window.reset() == 6


def test_reveal_rebinds_total_and_resets():
    window = PaginationWindow(30)
    window.advance()

    assert window.reveal(3) == 3
    assert window.total == 3
    assert window.reveal(50) == 6
    assert window.reveal(0) == 0
    assert not window.has_more


def test_visible_returns_prefix():
    window = PaginationWindow(8)

    assert window.visible(list(range(8))) == [0, 1, 2, 3, 4, 5]
    window.advance()
    assert window.visible(list(range(8))) == list(range(8))


def test_custom_page_size():
    window = PaginationWindow(10, page_size=4)

    assert window.revealed == 4
    assert window.advance() == 8


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        PaginationWindow(10, page_size=0)


@pytest.mark.parametrize("total", [0, 1, 5, 6, 7, 12, 13, 40])
def test_window_stays_within_bounds(total):
    rng = random.Random(total)
    window = PaginationWindow(total)
    for _ in range(50):
        if rng.random() < 0.7:
            window.advance()
        else:
            assert window.reset() == min(6, total)
        assert 0 <= window.revealed <= total
        assert window.has_more == (window.revealed < total)
