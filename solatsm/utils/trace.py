# solatsm/utils/trace.py

"""
Tabular views of a SOLA run: the per-frame trace as a pandas DataFrame
(optionally written to CSV) and the end-of-run summary report.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
from tabulate import tabulate

from solatsm.core.tsm import TsmResult

logger = logging.getLogger(__name__)

TRACE_COLUMNS = ["frame", "lag", "score", "overlap", "valid_length"]


def frames_to_dataframe(result: TsmResult) -> pd.DataFrame:
    """One row per frame: frame index, chosen lag, score, crossfade length and valid length."""
    return pd.DataFrame(result.frames, columns=TRACE_COLUMNS)


def save_trace(result: TsmResult, output_path: Path) -> pd.DataFrame:
    """Writes the per-frame trace to CSV and returns it."""
    df = frames_to_dataframe(result)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    logger.info(f"Frame trace ({len(df)} rows) saved to {output_path}")
    return df


def report_rows(
    result: TsmResult,
    bytes_read: Optional[int] = None,
    bytes_written: Optional[int] = None
) -> List[Tuple[str, str]]:
    rows = [
        ("Time-scale factor", f"{result.alpha:0.2f}"),
        ("Frame size", str(result.frame_size)),
        ("Analysis interval (Sa)", str(result.analysis_interval)),
        ("Synthesis interval (Ss)", str(result.synthesis_interval)),
        ("Frames", str(len(result.frames))),
        ("Output samples", str(result.output_length)),
    ]
    if bytes_read is not None:
        rows.append(("Number of bytes read", str(bytes_read)))
    if bytes_written is not None:
        rows.append(("Number of bytes written", str(bytes_written)))
    return rows


def format_report(
    result: TsmResult,
    bytes_read: Optional[int] = None,
    bytes_written: Optional[int] = None
) -> str:
    """Renders the run summary as a plain table."""
    return tabulate(report_rows(result, bytes_read, bytes_written), tablefmt="plain", disable_numparse=True)
