"""html2docx CLI"""

import argparse
import logging
import sys
from pathlib import Path

from html2docx import HtmlToDocx

MARGIN_SIDES = ("top", "right", "bottom", "left", "header", "footer", "gutter")


def build_options(args: argparse.Namespace) -> dict:
    """CLI 인자 → 문서 옵션"""
    options = {
        "orientation": args.orientation,
        "decode_unicode": args.decode_unicode,
        "page_number": args.page_number,
        "header": bool(args.header),
        "footer": bool(args.footer) or args.page_number,
    }
    if args.font:
        options["font"] = args.font
    if args.font_size:
        options["font_size"] = args.font_size
        options["complex_script_font_size"] = args.font_size
    if args.title:
        options["title"] = args.title

    margins = {
        side: getattr(args, f"margin_{side}")
        for side in MARGIN_SIDES
        if getattr(args, f"margin_{side}") is not None
    }
    if margins:
        options["margins"] = margins
    return options


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="HTML을 DOCX로 변환",
        prog="html2docx",
    )
    parser.add_argument("input", help="입력 HTML 파일")
    parser.add_argument("-o", "--output", help="출력 DOCX 파일")
    parser.add_argument("--header", help="머리글 HTML 파일")
    parser.add_argument("--footer", help="바닥글 HTML 파일")
    parser.add_argument(
        "--orientation",
        choices=["portrait", "landscape"],
        default="portrait",
        help="용지 방향 (기본: portrait)",
    )
    parser.add_argument("--font", help="기본 글꼴 (기본: Times New Roman)")
    parser.add_argument("--font-size", help="기본 글자 크기 (예: 12pt, 16px, 24)")
    parser.add_argument("--title", help="문서 제목")
    for side in MARGIN_SIDES:
        parser.add_argument(f"--margin-{side}", help=f"{side} 여백 (예: 1in, 2cm, 96px, 1440)")
    parser.add_argument("--page-number", action="store_true", help="바닥글에 쪽 번호 (Page N of M)")
    parser.add_argument("--decode-unicode", action="store_true", help="HTML 엔티티 디코딩")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="로그 수준 (기본: WARNING)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: {input_path} not found", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.output) if args.output else input_path.with_suffix(".docx")

    try:
        header_html = Path(args.header).read_text(encoding="utf-8") if args.header else None
        footer_html = Path(args.footer).read_text(encoding="utf-8") if args.footer else None

        converter = HtmlToDocx(build_options(args))
        result = converter.convert(
            input_path.read_text(encoding="utf-8"),
            output_path,
            header_html=header_html,
            footer_html=footer_html,
        )
        print(f"Converted: {result}")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
