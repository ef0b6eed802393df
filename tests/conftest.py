"""Shared fixtures: a small mtcars-style frame and tables built from it."""

import numpy as np
import pandas as pd
import pytest

from tabledust import dust


@pytest.fixture
def mtcars() -> pd.DataFrame:
    """First six rows of the classic mtcars data."""
    return pd.DataFrame(
        {
            'mpg': [21.0, 21.0, 22.8, 21.4, 18.7, 18.1],
            'cyl': [6, 6, 4, 6, 8, 6],
            'disp': [160.0, 160.0, 108.0, 258.0, 360.0, 225.0],
            'hp': [110, 110, 93, 110, 175, 105],
            'drat': [3.90, 3.90, 3.85, 3.08, 3.15, 2.76],
            'wt': [2.620, 2.875, 2.320, 3.215, 3.440, 3.460],
            'qsec': [16.46, 17.02, 18.61, 19.44, 17.02, 20.22],
            'vs': [0, 0, 1, 1, 0, 1],
            'am': [1, 1, 1, 0, 0, 0],
            'gear': [4, 4, 4, 3, 3, 3],
            'carb': [4, 4, 1, 1, 2, 1],
        },
        index=[
            'Mazda RX4', 'Mazda RX4 Wag', 'Datsun 710',
            'Hornet 4 Drive', 'Hornet Sportabout', 'Valiant',
        ],
    )


@pytest.fixture
def tbl(mtcars):
    return dust(mtcars)


@pytest.fixture
def labels() -> pd.DataFrame:
    """Four by four frame whose cells name their own position ('v23' is row 2, col 3)."""
    return pd.DataFrame(
        [[f'v{r}{c}' for c in range(1, 5)] for r in range(1, 5)],
        columns=['a', 'b', 'c', 'd'],
    )


@pytest.fixture
def long_frame() -> pd.DataFrame:
    """Ten rows, two columns."""
    return pd.DataFrame({'x': list(range(1, 11)), 'y': [f'r{i}' for i in range(1, 11)]})


@pytest.fixture
def ols_data() -> pd.DataFrame:
    rng = np.random.RandomState(42)
    n = 30
    wt = rng.uniform(1.5, 5.5, n)
    cyl = np.tile([4, 6, 8], n // 3)
    mpg = 37 - 3.5 * wt - 0.8 * cyl + rng.normal(0, 1.5, n)
    return pd.DataFrame({'mpg': mpg, 'wt': wt, 'cyl': cyl})
