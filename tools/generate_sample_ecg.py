from __future__ import annotations

import random
from pathlib import Path

import pandas as pd

FEATURES = 20


def ecg_row(level: float, jitter: float = 0.08) -> list[float]:
    """
    One row of synthetic ECG features hovering around `level`.

    Values are rounded to 4 decimals so the files look like exported features.
    """
    return [round(max(0.0, level + random.uniform(-jitter, jitter)), 4) for _ in range(FEATURES)]


def main(out_dir: str = "test_data/ecg", seed: int = 7) -> None:
    random.seed(seed)

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    samples = {
        "high_risk.csv": ecg_row(0.55),
        "low_risk.csv": ecg_row(0.15),
        "borderline.csv": [0.35] * FEATURES,
    }
    for name, row in samples.items():
        pd.DataFrame([row]).to_csv(out / name, header=False, index=False)

    # Too few values: rejected as malformed.
    pd.DataFrame([ecg_row(0.4)[:5]]).to_csv(out / "malformed_short.csv", header=False, index=False)

    # Header row first: only the first line is read, so this is malformed too.
    header = pd.DataFrame([ecg_row(0.5)], columns=[f"f{i}" for i in range(1, FEATURES + 1)])
    header.to_csv(out / "malformed_header.csv", index=False)

    print(f"Wrote {len(samples) + 2} sample files to {out}")


if __name__ == "__main__":
    main()
