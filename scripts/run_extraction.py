#!/usr/bin/env python
"""
용어 후보 추출 독립 실행 스크립트

외부 저장소 없이 JSON으로 내보낸 문서 묶음에서 용어 후보를 추출합니다.

입력 형식:
    - Elasticsearch 검색 결과 내보내기: {"hits": {"hits": [{"_source": {"content": "..."}}]}}
    - 문자열 리스트: ["문서1", "문서2", ...]

사용법:
    # 기본 실행 (config/base.yaml + 환경별 설정)
    python scripts/run_extraction.py --input data/source-documents.json

    # 임계값 / 불용어 지정
    python scripts/run_extraction.py --input docs.json --npmi-threshold 0.1 --stopword 제이콥스

    # 결과를 JSON으로 저장
    python scripts/run_extraction.py --input docs.json --json output/candidates.json

종료 코드:
    0: 추출 완료
    1: 입력 파일 없음
    2: 실행 오류
"""

import argparse
import json
import sys
import time
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

# 프로젝트 루트를 PYTHONPATH에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from termbase.lib.config_loader import load_config  # noqa: E402
from termbase.lib.errors import DocumentSourceError, ErrorCode, TermbaseException  # noqa: E402
from termbase.lib.logger import configure_logging  # noqa: E402
from termbase.modules.extraction import (  # noqa: E402
    CandidateInfo,
    DictionarySuggestion,
    ExtractionResult,
    INounSequenceExtractor,
)
from termbase.modules.extraction.factory import TermCandidateExtractorFactory  # noqa: E402

DEFAULT_INPUT = "data/elasticsearch-source-documents.json"
HIGH_CONFIDENCE = 0.8


def load_documents(path: Path) -> list[str]:
    """
    JSON 내보내기 파일에서 문서 본문 로드 (빈 본문은 건너뜀)

    Raises:
        DocumentSourceError: 지원하지 않는 형식인 경우
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DocumentSourceError(ErrorCode.SOURCE_002, path=str(path)) from e

    if isinstance(data, list):
        contents = [item for item in data if isinstance(item, str)]
    elif isinstance(data, dict) and isinstance(data.get("hits"), dict):
        contents = [
            (hit.get("_source") or {}).get("content")
            for hit in data["hits"].get("hits", [])
            if isinstance(hit, dict)
        ]
    else:
        raise DocumentSourceError(ErrorCode.SOURCE_002, path=str(path))

    return [content for content in contents if isinstance(content, str) and content.strip()]


def detect_dictionary_suggestions(result: ExtractionResult, detector: Any) -> list[DictionarySuggestion]:
    """최종 후보에 규칙 점수 기반 사전 추천 적용"""
    infos = [CandidateInfo.from_candidate(candidate) for candidate in result.candidates]
    unigram_counts = {stat.term: stat.count for stat in result.unigrams}
    return detector.detect(infos, unigram_counts)


def result_to_dict(result: ExtractionResult, suggestions: list[DictionarySuggestion]) -> dict[str, Any]:
    """JSON 저장용 변환 (Decimal은 문자열로 보존)"""
    return {
        "total_documents": result.total_documents,
        "failed_document_indices": list(result.failed_document_indices),
        "unigram_count": len(result.unigrams),
        "ngram_count": len(result.ngrams),
        "candidates": [
            {
                "term": c.term,
                "components": list(c.components),
                "count": c.count,
                "doc_count": c.doc_count,
                "pmi": str(c.pmi),
                "npmi": str(c.npmi),
                "idf": str(c.idf),
                "avg_tfidf": str(c.avg_tfidf),
                "relevance_score": str(c.relevance_score),
            }
            for c in result.candidates
        ],
        "dictionary_candidates": [
            {
                "original_term": d.original_term,
                "suggested_term": d.suggested_term,
                "npmi": str(d.npmi),
                "reason": d.reason.value,
                "confidence": d.confidence.value,
            }
            for d in result.dictionary_candidates
        ],
        "dictionary_suggestions": [
            {
                "original_term": s.original_term,
                "suggested_term": s.suggested_term,
                "npmi": str(s.npmi),
                "reasons": s.reasons,
                "confidence": s.confidence,
            }
            for s in suggestions
        ],
    }


def print_results(result: ExtractionResult, suggestions: list[DictionarySuggestion], top: int) -> None:
    print(f"\n========== 추출된 용어 후보 (관련성 점수순, 상위 {top}개) ==========")
    for i, c in enumerate(result.candidates[:top], start=1):
        print(
            f"{i}. {c.term} | 빈도: {c.count} | 문서수: {c.doc_count} | "
            f"NPMI: {c.npmi.quantize(Decimal('0.0001'))} | 관련성: {c.relevance_score.quantize(Decimal('0.0001'))}"
        )

    high_confidence = [s for s in suggestions if s.confidence >= HIGH_CONFIDENCE]
    print(f"\n========== 사전 추가 권장 용어 (신뢰도 80%+, {len(high_confidence)}개) ==========")
    for i, s in enumerate(high_confidence[:20], start=1):
        print(
            f"{i}. {s.original_term} → {s.suggested_term} | "
            f"신뢰도: {s.confidence * 100:.0f}% | 이유: {', '.join(s.reasons[:2])}"
        )

    print("\n========== 통계 요약 ==========")
    print(f"총 문서: {result.total_documents}개 (실패: {result.failed_documents}개)")
    print(f"총 Unigram: {len(result.unigrams)}개")
    print(f"총 Ngram: {len(result.ngrams)}개")
    print(f"총 용어 후보: {len(result.candidates)}개")
    print(f"사전 추천 용어: {len(suggestions)}개 (신뢰도 80%+: {len(high_confidence)}개)")


def _decimal_arg(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"invalid decimal value: {value!r}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="JSON 문서 묶음에서 용어 후보 추출",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  python scripts/run_extraction.py --input docs.json
  python scripts/run_extraction.py --input docs.json --min-count 2 --npmi-threshold 0.1
  python scripts/run_extraction.py --input docs.json --json output/candidates.json
        """,
    )
    parser.add_argument("--input", type=str, default=DEFAULT_INPUT, help=f"입력 JSON 경로 (기본값: {DEFAULT_INPUT})")
    parser.add_argument("--environment", type=str, default=None, help="설정 환경 (development/test/production)")
    parser.add_argument("--min-count", type=int, default=None, help="최소 bigram 빈도")
    parser.add_argument("--npmi-threshold", type=_decimal_arg, default=None, help="NPMI 하한")
    parser.add_argument("--relevance-threshold", type=_decimal_arg, default=None, help="관련성 점수 하한")
    parser.add_argument("--stopword", action="append", default=[], help="추가 불용어 (반복 지정 가능)")
    parser.add_argument("--max-workers", type=int, default=None, help="코퍼스 분석 워커 수")
    parser.add_argument(
        "--on-document-error",
        type=str,
        choices=["raise", "skip"],
        default=None,
        help="문서 단위 분석 실패 정책",
    )
    parser.add_argument("--top", type=int, default=30, help="출력할 후보 수 (기본값: 30)")
    parser.add_argument("--json", type=str, default=None, help="결과 저장 파일 경로 (JSON)")
    return parser


def run(args: argparse.Namespace, tokenizer: INounSequenceExtractor | None = None) -> int:
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"⚠️  입력 파일이 없습니다: {input_path.resolve()}")
        return 1

    config = load_config(environment=args.environment)
    if config.logging and config.logging.get("level"):
        configure_logging(level=str(config.logging["level"]))

    overrides = {
        "min_count": args.min_count,
        "npmi_threshold": args.npmi_threshold,
        "relevance_threshold": args.relevance_threshold,
        "max_workers": args.max_workers,
        "on_document_error": args.on_document_error,
    }
    extraction_dict = config.extraction.to_dict()
    extraction_dict.update({key: value for key, value in overrides.items() if value is not None})
    extraction_dict["stopwords"] = [*extraction_dict["stopwords"], *args.stopword]
    config.extraction = type(config.extraction).model_validate(extraction_dict)

    documents = load_documents(input_path)
    print(f"📄 로드된 문서 수: {len(documents)}")

    start = time.perf_counter()
    extractor = TermCandidateExtractorFactory.create(config, tokenizer=tokenizer)
    print(f"[TIMING] 추출기 초기화: {(time.perf_counter() - start) * 1000:.0f}ms")

    print("\n문서 분석 중...")
    start = time.perf_counter()
    result = extractor.extract(documents, config.extraction.to_extraction_config(scoring=config.scoring))
    print(f"추출 완료: {(time.perf_counter() - start) * 1000:.0f}ms")

    suggestions = detect_dictionary_suggestions(result, TermCandidateExtractorFactory.create_detector(config))
    print_results(result, suggestions, args.top)

    if args.json:
        output_path = Path(args.json)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(result_to_dict(result, suggestions), f, ensure_ascii=False, indent=2)
        print(f"\n📁 결과 저장됨: {output_path}")

    return 0


def main(argv: list[str] | None = None, tokenizer: INounSequenceExtractor | None = None) -> int:
    """메인 함수"""
    args = build_parser().parse_args(argv)

    try:
        return run(args, tokenizer=tokenizer)
    except TermbaseException as e:
        print(f"\n❌ 실행 오류 [{e.error_code}]: {e}")
        return 2
    except Exception as e:
        print(f"\n❌ 실행 오류: {e}")
        import traceback

        traceback.print_exc()
        return 2


if __name__ == "__main__":
    sys.exit(main())
