from __future__ import annotations

from typing import Sequence

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from rreftools.io.text import format_entry
from rreftools.reducer import Reducer


def _draw_matrix(ax, M: Sequence[Sequence[float]], title: str, *, eps, cmap, pivots=None):
    ax.imshow(M, cmap=cmap, aspect="equal")
    ax.set_title(title)
    ax.set_xticks(range(len(M[0])))
    ax.set_yticks(range(len(M)))

    if len(M) * len(M[0]) <= 400:
        for i, row in enumerate(M):
            for j, v in enumerate(row):
                ax.text(j, i, format_entry(v, eps), ha="center", va="center", fontsize=8)

    for i, p in pivots or []:
        ax.add_patch(
            Rectangle((p - 0.5, i - 0.5), 1, 1, fill=False, edgecolor="red", linewidth=2)
        )


def draw_reduction(
    M: Sequence[Sequence[float]],
    *,
    eps: float | None = None,
    zero_tol: float | None = None,
    cmap: str = "coolwarm",
    save_path: str | None = None,
) -> list[list[float]]:
    """
    Draw a matrix and its RREF side by side, pivots outlined in red.

    If save_path is set, saves a PNG there and closes the figure,
    otherwise shows it. Returns the RREF as a list of lists.
    """
    red = Reducer(M, zero_tol=zero_tol)
    R = red.to_list()
    original = [[float(v) for v in row] for row in M]
    pivots = list(enumerate(red.pivot_columns()))

    fig, (axA, axB) = plt.subplots(1, 2, figsize=(12, 6))
    _draw_matrix(axA, original, f"input  {red.height}x{red.width}", eps=eps, cmap=cmap)
    _draw_matrix(
        axB, R, f"RREF  rank={red.rank}  passes={red.passes}",
        eps=eps, cmap=cmap, pivots=pivots,
    )

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=200)
        plt.close(fig)
    else:
        plt.show()

    return R
