"""
番号ファイル読み込み用のクリーニング
"""
import re

import pandas as pd

EDGE_RE = re.compile(r"^[\s\u0000-\u001F\u007F\u200B\uFEFF]+|[\s\u0000-\u001F\u007F\u200B\uFEFF]+$")


def clean_basic(val) -> str:
    """
    前後の空白・制御文字・不可視文字（BOM含む）だけを除去。
    番号の途中の文字は桁位置がずれないようそのまま残す。
    """
    if val is None or (not isinstance(val, str) and pd.isnull(val)):
        return ""
    return EDGE_RE.sub("", str(val))


def clean_codes(values) -> list[str]:
    """Clean every value and drop the blank ones, keeping order and duplicates."""
    codes = []
    for v in values:
        s = clean_basic(v)
        if s:
            codes.append(s)
    return codes
