import argparse
import logging
from pathlib import Path
import sys

from config.settings import setup_logger, load_settings, CFG_PATH
from core.code_gen import CodeGenerator, CodeSpaceExhausted, min_pairwise_distance
from core.code_io import load_existing_codes, write_prefix_codes, output_path, export_excel
from core.prefix_request import PrefixRequest
from core.random_source import SEED_MAX, make_random_source


def _int_at_least(minimum):
    def parse(text):
        digits = text[1:] if text.startswith("-") else text
        if not (digits.isascii() and digits.isdigit()):
            raise argparse.ArgumentTypeError(f"整数ではありません: {text!r}")
        value = int(text)
        if value < minimum:
            raise argparse.ArgumentTypeError(f"{minimum} 以上を指定してください: {value}")
        return value
    return parse


def _seed(text):
    value = _int_at_least(0)(text)
    if value >= SEED_MAX:
        raise argparse.ArgumentTypeError(f"seed は64bit符号なし整数です: {value}")
    return value


def _prefix_request(text):
    try:
        return PrefixRequest.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="ExamCodeManager - 互いにハミング距離の離れた受験番号を発行",
    )
    parser.add_argument("min_hamming_distance", type=_int_at_least(0), help="番号同士で最低限異なる桁数")
    parser.add_argument("digits", type=_int_at_least(1), help="番号の桁数")
    parser.add_argument("prefixes", nargs="*", type=_prefix_request, metavar="PREFIX_SPEC",
                        help='発行件数。"78" または "AB3:78"（プレフィックスAB3で78件）')
    parser.add_argument("--seed", type=_seed, default=None, help="乱数シード（再現用）")
    parser.add_argument("--existing", type=Path, action="append", default=[], help="避けたい既存番号ファイル（複数可）")
    parser.add_argument("--max-attempts", type=_int_at_least(1), default=None, help="1件あたりの最大試行回数")
    parser.add_argument("--output-dir", type=Path, default=None, help="出力先フォルダ")
    parser.add_argument("--excel", type=Path, default=None, help="全番号をまとめたExcelの出力先")
    parser.add_argument("--no-progress", action="store_true", help="棄却ごとの '.' 表示をしない")
    parser.add_argument("--config", type=Path, default=CFG_PATH, help="設定ファイル")
    parser.add_argument("--loglevel", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO", help="ログレベル")
    return parser.parse_args(argv)


def _print_dot(_candidate):
    print(".", end="", flush=True)


def run(args, cfg, logger) -> dict[str, list[str]]:
    gen_cfg = cfg["generation"]
    seed = args.seed if args.seed is not None else gen_cfg["seed"]
    max_attempts = args.max_attempts if args.max_attempts is not None else gen_cfg["max_attempts"]
    output_dir = args.output_dir or Path(cfg["paths"]["output_dir"])
    progress = gen_cfg["progress"] and not args.no_progress

    generator = CodeGenerator(
        args.digits,
        make_random_source(seed),
        max_attempts=max_attempts,
        on_reject=_print_dot if progress else None,
        logger=logger,
    )
    for path in args.existing:
        codes = load_existing_codes(path, column=cfg["existing"]["column"],
                                    encoding=cfg["existing"]["encoding"], logger=logger)
        generator.extend_used(codes)

    batches: dict[str, list[str]] = {}
    for req in args.prefixes:
        logger.info(f"Processing prefix {req.prefix} trying to find {req.count}.")

        def found(req=req):
            for i, code in enumerate(generator.new_codes(req.prefix, req.count, args.min_hamming_distance)):
                logger.info(f"Found {i + 1} of {req.count}")
                yield code

        out = output_path(output_dir, cfg["paths"]["output_pattern"], req.prefix)
        codes = write_prefix_codes(found(), out)
        batches.setdefault(req.prefix, []).extend(codes)
        logger.info(f"出力: {out}")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"minimum pairwise distance for {req}: {min_pairwise_distance(codes)}")

    excel_path = args.excel or cfg["paths"]["output_excel"]
    if excel_path:
        export_excel(batches, Path(excel_path), cfg["excel"]["font_name"], logger=logger)
    logger.info(f"All finished! ({len(generator.used)} codes in use)")
    return batches


def main(argv=None):
    args = parse_args(argv)
    try:
        cfg = load_settings(args.config)
    except (OSError, ValueError) as e:
        print(f"設定ファイルを読み込めません: {e}", file=sys.stderr)
        return 1
    logger = setup_logger(level=args.loglevel, log_dir=cfg["paths"]["logs_dir"])
    logger.info(f"最小ハミング距離: {args.min_hamming_distance} / 桁数: {args.digits}")
    try:
        run(args, cfg, logger)
    except CodeSpaceExhausted as e:
        logger.error(f"番号を発行できません: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"処理に失敗しました: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
