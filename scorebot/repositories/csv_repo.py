from __future__ import annotations
import os
import pandas as pd
from filelock import FileLock

class CsvTable:
    """One CSV file guarded by a sibling .lock file. Cells are read as plain strings."""

    def __init__(self, path: str, columns: list[str]):
        self.path = path
        self.columns = columns
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self.lock = FileLock(self.path + ".lock")
        if not os.path.exists(self.path):
            df = pd.DataFrame(columns=self.columns)
            with self.lock:
                df.to_csv(self.path, index=False)

    def _read(self) -> pd.DataFrame:
        if not os.path.exists(self.path):
            return pd.DataFrame(columns=self.columns)
        df = pd.read_csv(self.path, dtype=str, keep_default_na=False)
        for c in self.columns:
            if c not in df.columns:
                df[c] = ""
        return df

    def _write(self, df: pd.DataFrame) -> None:
        # ensure schema before write
        for c in self.columns:
            if c not in df.columns:
                df[c] = ""
        df[self.columns].to_csv(self.path, index=False)

    def read(self) -> pd.DataFrame:
        with self.lock:
            return self._read()

    def append_row(self, row: dict) -> None:
        with self.lock:
            df = self._read()
            df = pd.concat([df, pd.DataFrame([{k: "" if v is None else str(v) for k, v in row.items()}])],
                           ignore_index=True)
            self._write(df)

    def _mask(self, df: pd.DataFrame, conds: dict):
        mask = pd.Series(True, index=df.index)
        for k, v in conds.items():
            if k not in df.columns:
                return pd.Series(False, index=df.index)
            mask &= df[k] == str(v)
        return mask

    def find(self, **conds) -> pd.DataFrame:
        df = self.read()
        if df.empty:
            return df
        return df[self._mask(df, conds)]

    def update(self, where: dict, values: dict) -> int:
        """Set `values` on every row matching `where`; returns the number of rows touched."""
        with self.lock:
            df = self._read()
            if df.empty:
                return 0
            mask = self._mask(df, where)
            hits = int(mask.sum())
            if hits:
                for col, val in values.items():
                    df.loc[mask, col] = "" if val is None else str(val)
                self._write(df)
            return hits
