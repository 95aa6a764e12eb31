import inspect
import json
import time
from datetime import UTC, datetime
from functools import wraps

import polars as pl


def _events_frame(events):
    """Build a Polars DF [DataFrame] from heterogeneous history events.

    Columns whose non-null values do not share one scalar type (e.g. ``result``
    holding an int for ``add_vertex`` and an edge dict for ``add_edge``) are
    stored as JSON strings.
    """
    columns = []
    for evt in events:
        for k in evt:
            if k not in columns:
                columns.append(k)

    data = {}
    for col in columns:
        values = [evt.get(col) for evt in events]
        kinds = {type(v) for v in values if v is not None}
        if len(kinds) > 1 or kinds & {dict, list}:
            values = [None if v is None else json.dumps(v, ensure_ascii=False) for v in values]
        data[col] = pl.Series(col, values, strict=False)
    return pl.DataFrame(data)


def _utc_stamp() -> str:
    return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _plain(value):
    """Reduce records and containers to JSON-ready values."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    return value


# Methods whose calls are recorded, in the order they appear on Graph.
MUTATORS = ("add_vertex", "remove_vertex", "add_edge", "remove_edge")


class History:
    # Mutation log

    def _log_event(self, op: str, **fields):
        if not self._history_enabled:
            return
        evt = {
            "version": self._version,
            "ts_utc": _utc_stamp(),
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        evt.update({k: _plain(v) for k, v in fields.items()})
        self._history.append(evt)

    def _recorded(self, op, method):
        sig = inspect.signature(method)

        @wraps(method)
        def call(*args, **kwargs):
            params = sig.bind(*args, **kwargs)
            params.apply_defaults()
            result = method(*args, **kwargs)
            # failed calls raise before this point and leave no event
            self._log_event(op, **params.arguments, result=result)
            return result

        return call

    def _install_history_hooks(self):
        for op in MUTATORS:
            method = getattr(self, op)
            if not hasattr(method, "__wrapped__"):
                setattr(self, op, self._recorded(op, method))

    def history(self, as_df: bool = False):
        """Return the append-only mutation history.

        Parameters
        --
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise return a list of dicts.

        Returns
        ---
        list[dict] or polars.DataFrame
            Each event includes: 'version' (graph version after the mutation),
            'ts_utc' (ISO-8601, UTC), 'mono_ns' (monotonic nanoseconds since the
            graph was created), 'op', the call arguments, and 'result'.

        """
        if as_df:
            return _events_frame(self._history)
        return list(self._history)

    def export_history(self, path) -> int:
        """Write the mutation history to disk.

        Parameters
        --
        path : str | pathlib.Path
            Output path. Supported extensions: '.parquet', '.ndjson' (a.k.a. '.jsonl'),
            '.json', '.csv'. Unknown extensions default to Parquet by appending '.parquet'.

        Returns
        ---
        int
            Number of events written. Returns 0 if the history is empty.

        """
        if not self._history:
            return 0
        path = str(path)
        df = _events_frame(self._history)
        p = path.lower()
        if p.endswith(".parquet"):
            df.write_parquet(path)
        elif p.endswith(".ndjson") or p.endswith(".jsonl"):
            df.write_ndjson(path)
        elif p.endswith(".json"):
            with open(path, "w", encoding="utf-8") as f:
                json.dump(df.to_dicts(), f, ensure_ascii=False)
        elif p.endswith(".csv"):
            df.write_csv(path)
        else:
            df.write_parquet(path + ".parquet")
        return df.height

    def enable_history(self, flag: bool = True):
        """Enable or disable in-memory mutation logging."""
        self._history_enabled = bool(flag)

    def clear_history(self):
        """Clear the in-memory mutation log (exported files are left alone)."""
        self._history.clear()

    def mark(self, label: str):
        """Insert a manual marker (``op='mark'``) into the mutation history.

        Logging must be enabled for the marker to be recorded.
        """
        self._log_event("mark", label=label)
