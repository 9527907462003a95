#!/usr/bin/env python3
"""
HathiTrust Bib API Lookup
식별자(OCLC, LCCN, ISSN, ISBN, htid, 레코드 번호)로 HathiTrust 카탈로그 레코드와 아이템을 조회합니다.
"""

import argparse
import json
import os
import sys

import httpx
import pandas as pd

from hathi_logging import ClientLogger
from hathitrust import (
    IDENTIFIER_KINDS,
    HathiBibClient,
    HathiTrustError,
    InvalidArgumentError,
)
from models.volume import VolumeResult

# 메인 로거
logger = ClientLogger("main")


def parse_id_set(text: str) -> dict[str, str]:
    """
    "--ids" 인자 파싱

    예: "htid=BJD1;oclc=424023" → {"htid": "BJD1", "oclc": "424023"}
    """
    id_set = {}
    for part in text.split(";"):
        part = part.strip()
        if not part:
            continue
        kind, sep, value = part.partition("=")
        if not sep or not kind.strip() or not value.strip():
            raise argparse.ArgumentTypeError(
                f"식별자 집합은 kind=value;kind=value 형식이어야 합니다: {text!r}"
            )
        id_set[kind.strip().lower()] = value.strip()
    if not id_set:
        raise argparse.ArgumentTypeError("빈 식별자 집합입니다")
    return id_set


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="식별자로 HathiTrust 카탈로그 레코드와 디지털 아이템을 조회합니다.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  python main.py --oclc 424023
  python main.py --htid BJD1 --oclc 424023 --isbn 0030110408 --which full
  python main.py --lccn 70628581 --isbn 0030110408 --searchfor many
  python main.py --ids "htid=BJD1;oclc=424023" --ids "lccn=70628581" --output items.csv
        """,
    )

    # 식별자는 입력 순서대로 직렬화되므로 하나의 목록에 모음
    for kind in IDENTIFIER_KINDS:
        parser.add_argument(
            f"--{kind}",
            dest="identifiers",
            action="append",
            type=lambda value, kind=kind: (kind, value),
            metavar=kind.upper(),
            help=f"{kind} 식별자",
        )

    parser.add_argument(
        "--ids",
        action="append",
        type=parse_id_set,
        default=[],
        help='식별자 집합 "kind=value;kind=value" (반복 가능, 주어지면 개별 식별자 무시)',
    )

    parser.add_argument(
        "--which",
        choices=["brief", "full"],
        default="brief",
        help="응답 종류 (기본: brief, full은 MARC-XML 포함)",
    )

    parser.add_argument(
        "--searchfor",
        choices=["single", "many"],
        default="single",
        help="여러 식별자를 한 항목(single) 또는 여러 항목(many)으로 검색 (기본: single)",
    )

    parser.add_argument(
        "--normalize",
        action="store_true",
        help="식별자를 정규형으로 변환 후 요청",
    )

    parser.add_argument(
        "--url-only",
        action="store_true",
        help="요청 URL만 출력하고 종료",
    )

    parser.add_argument(
        "--raw",
        action="store_true",
        help="요약 대신 응답 JSON 출력",
    )

    parser.add_argument(
        "--timeout", type=float, default=None, help="요청 타임아웃 (초)"
    )

    parser.add_argument(
        "--output", "-o", type=str, default=None, help="출력 파일 경로"
    )

    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["csv", "json"],
        default="csv",
        help="출력 형식 (기본: csv)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=os.environ.get("LOG_LEVEL", "INFO").upper(),
        help="로깅 레벨 (기본: INFO)",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="로그 파일 경로 (JSON Lines 포맷)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="HTTP 요청/응답 본문 로깅",
    )

    return parser


def save_results(payload: dict, output: str, format: str) -> None:
    """결과 저장 (csv: 아이템별 행, json: 응답 원본)"""
    if format == "csv":
        rows = VolumeResult.from_json(payload).to_rows()
        df = pd.DataFrame(rows)
        df.to_csv(output, index=False, encoding="utf-8-sig")
    elif format == "json":
        with open(output, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
    print(f"\n결과가 {output}에 저장되었습니다.")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    ClientLogger.configure(level=args.log_level, log_file=args.log_file, console=True)

    identifiers = {}
    for kind, value in args.identifiers or []:
        if kind in identifiers:
            parser.error(f"--{kind}가 여러 번 주어졌습니다 ({identifiers[kind]!r}, {value!r})")
        identifiers[kind] = value

    options = {}
    if args.timeout is not None:
        options["timeout"] = args.timeout
    query = dict(
        variant=args.which,
        mode=args.searchfor,
        normalize=args.normalize,
        **identifiers,
    )

    try:
        client = HathiBibClient(**options)
        if args.url_only:
            print(client.url(args.ids, **query))
            return 0
        payload = client.lookup(args.ids, verbose=args.verbose, **query)
    except InvalidArgumentError as e:
        logger.error("invalid_argument", str(e))
        return 2
    except (HathiTrustError, httpx.RequestError) as e:
        logger.error("lookup_failed", str(e))
        return 1

    if args.raw or not isinstance(payload, dict):
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(VolumeResult.from_json(payload).summary())

    if args.output:
        save_results(payload, args.output, args.format)

    return 0


if __name__ == "__main__":
    sys.exit(main())
