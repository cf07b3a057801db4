"""
番号ファイルの読み込み・書き出し
"""
from pathlib import Path

import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from utils.cleaning import clean_codes

TABLE_SUFFIXES = {".csv", ".xlsx", ".xlsm"}


def load_existing_codes(path: Path, column=0, encoding="utf-8", logger=None) -> list[str]:
    """
    既存番号を読み込む。
    .csv / .xlsx は `column` 列（番号 or 列名）から取得、それ以外は1行1番号のテキスト。
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in TABLE_SUFFIXES:
        if suffix == ".csv":
            df = pd.read_csv(path, header=None, dtype=str, encoding=encoding, keep_default_na=False)
        else:
            df = pd.read_excel(path, header=None, dtype=str, engine="openpyxl")
        if isinstance(column, str):
            # 列名指定：先頭行をヘッダとして扱う
            df.columns = [str(c) for c in df.iloc[0]]
            df = df.iloc[1:]
        if column not in df.columns:
            raise ValueError(f"{path}: column {column!r} not found")
        values = df[column].tolist()
    else:
        values = path.read_text(encoding=encoding).splitlines()
    codes = clean_codes(values)
    if logger:
        logger.info(f"Read file {path} containing {len(codes)} entries")
    return codes


def output_path(output_dir: Path, pattern: str, prefix: str) -> Path:
    return Path(output_dir) / pattern.replace("{prefix}", prefix)


def write_prefix_codes(codes, out_path: Path) -> list[str]:
    """
    Write each code on its own line as it arrives. `codes` may be a generator;
    lines go to a _tmp file which replaces `out_path` once it is exhausted.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = out_path.with_name(out_path.stem + "_tmp" + out_path.suffix)
    written = []
    with tmp_path.open("w", encoding="utf-8", newline="\n") as f:
        for code in codes:
            f.write(code + "\n")
            f.flush()
            written.append(code)
    tmp_path.replace(out_path)
    return written


def style_excel(path: Path, font_name: str, text_columns=("prefix", "code")):
    """ヘッダ太字、番号列は文字列書式（先頭の0を保持）、列幅を内容に合わせる"""
    wb = load_workbook(path)
    ws = wb.active
    body = Font(name=font_name)
    head = Font(name=font_name, bold=True)
    for col in ws.iter_cols():
        header = col[0]
        header.font = head
        width = len(str(header.value or ""))
        for c in col[1:]:
            c.font = body
            if header.value in text_columns:
                c.number_format = "@"
            width = max(width, len(str(c.value or "")))
        ws.column_dimensions[get_column_letter(header.column)].width = width + 2
    ws.freeze_panes = "A2"
    wb.save(path)


def export_excel(batches: dict[str, list[str]], path: Path, font_name: str, logger=None) -> pd.DataFrame:
    """Save all generated codes as one prefix/code table."""
    rows = [dict(prefix=prefix, code=code) for prefix, codes in batches.items() for code in codes]
    df = pd.DataFrame(rows, columns=["prefix", "code"]).astype(str)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_xlsx = path.with_name(path.stem + "_tmp.xlsx")
    try:
        df.to_excel(tmp_xlsx, index=False, engine="openpyxl")
        tmp_xlsx.replace(path)
        style_excel(path, font_name)
    except PermissionError:
        if logger:
            logger.error(f"{path} を開いているため書き込めません。閉じてから再実行してください。")
        raise
    if logger:
        logger.info(f"Excel 保存: {path} ({len(df)} codes)")
    return df
