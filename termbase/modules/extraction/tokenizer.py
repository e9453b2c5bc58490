"""
명사 시퀀스 추출기 (kiwipiepy 기반)

형태소 분석 결과에서 명사 계열 태그만 남기고, 원문 위치가 인접한
토큰을 하나의 시퀀스로 묶습니다.

후처리 필터:
- 2글자 미만 토큰 제거
- 한글(음절/자모)이 없는 토큰 제거
- HTML 엔티티 이름 제거 (정제되지 않은 원문의 잔여물)

예: "공유 주차장에서 결제를 진행했습니다" → [[공유, 주차장]]
"""

from collections.abc import Iterable
from typing import Any

from ...lib.errors import ErrorCode, TokenizerError
from ...lib.logger import get_logger
from .models import NounSequence, Token

logger = get_logger(__name__)

MIN_SEQUENCE_LENGTH = 2

# 토큰 사이 최대 허용 간격 (조사 "의" + 공백 = 2자, 여유분 포함 3자)
MAX_GAP = 3

MIN_TOKEN_LENGTH = 2

# 명사 계열 품사 태그 (Sejong 태그셋)
DEFAULT_NOUN_TAGS: frozenset[str] = frozenset(
    {
        "NNG",  # 일반 명사
        "NNP",  # 고유 명사
        "NNB",  # 의존 명사
        "NR",  # 수사
        "NP",  # 대명사
        "SL",  # 외국어
        "SH",  # 한자
        "SN",  # 숫자
        "XR",  # 어근
    }
)

DEFAULT_HTML_ENTITIES: frozenset[str] = frozenset(
    {
        "ldquo",
        "rdquo",
        "lsquo",
        "rsquo",
        "nbsp",
        "amp",
        "lt",
        "gt",
        "quot",
        "mdash",
        "ndash",
        "hellip",
    }
)


def contains_hangul(term: str) -> bool:
    """한글 음절 또는 자모가 하나라도 포함되어 있는지 확인"""
    return any(
        "\uac00" <= ch <= "\ud7a3" or "\u3131" <= ch <= "\u318e" or "\u1100" <= ch <= "\u11ff"
        for ch in term
    )


def is_valid_token(
    term: str,
    html_entities: frozenset[str] = DEFAULT_HTML_ENTITIES,
    min_length: int = MIN_TOKEN_LENGTH,
) -> bool:
    """후처리 필터 통과 여부"""
    if len(term) < min_length:
        return False
    if not contains_hangul(term):
        return False
    if term.lower() in html_entities:
        return False
    return True


def group_sequences(tokens: Iterable[Token], max_gap: int = MAX_GAP) -> list[NounSequence]:
    """
    오프셋 순으로 정렬된 토큰을 인접 시퀀스로 묶습니다.

    이전 토큰의 끝과 현재 토큰의 시작 간격이 max_gap 이하이면 같은 시퀀스로
    이어지고, 아니면 현재 시퀀스를 닫습니다. 2개 미만인 시퀀스는 버립니다.
    """
    result: list[NounSequence] = []
    buffer: list[Token] = []
    last_end_offset = -1

    for token in tokens:
        gap = token.start_offset - last_end_offset
        if last_end_offset == -1 or gap <= max_gap:
            buffer.append(token)
        else:
            if len(buffer) >= MIN_SEQUENCE_LENGTH:
                result.append(NounSequence(tuple(buffer)))
            buffer = [token]
        last_end_offset = token.end_offset

    if len(buffer) >= MIN_SEQUENCE_LENGTH:
        result.append(NounSequence(tuple(buffer)))

    return result


def get_original_phrase(text: str, sequence: NounSequence, from_index: int, to_index: int) -> str:
    """시퀀스의 토큰 범위에 해당하는 원문 구문 (NounSequence.original_phrase 위임)"""
    return sequence.original_phrase(text, from_index, to_index)


class KiwiNounSequenceExtractor:
    """
    kiwipiepy 기반 INounSequenceExtractor 구현체

    Kiwi 인스턴스는 초기화 비용이 크므로 추출기 하나당 한 번만 생성합니다.
    분석 호출은 프로세스 내부의 순수 계산이며 재시도하지 않습니다.
    """

    def __init__(
        self,
        noun_tags: Iterable[str] | None = None,
        html_entities: Iterable[str] | None = None,
        max_gap: int = MAX_GAP,
        min_token_length: int = MIN_TOKEN_LENGTH,
        user_words: Iterable[str] | None = None,
        model_type: str | None = None,
        kiwi: Any | None = None,
    ):
        """
        Args:
            noun_tags: 유지할 품사 태그 (None이면 DEFAULT_NOUN_TAGS)
            html_entities: 제외할 HTML 엔티티 이름 (None이면 DEFAULT_HTML_ENTITIES)
            max_gap: 같은 시퀀스로 볼 최대 토큰 간격 (문자 수)
            min_token_length: 최소 토큰 길이
            user_words: 분리되면 안 되는 사용자 사전 단어 (고유 명사로 등록)
            model_type: Kiwi 언어 모델 종류 (None이면 기본 모델)
            kiwi: 이미 생성된 Kiwi 인스턴스 (주입용)

        Raises:
            TokenizerError: 형태소 분석기를 초기화할 수 없는 경우
        """
        self.noun_tags = frozenset(noun_tags) if noun_tags is not None else DEFAULT_NOUN_TAGS
        self.html_entities = (
            frozenset(e.lower() for e in html_entities) if html_entities is not None else DEFAULT_HTML_ENTITIES
        )
        self.max_gap = max_gap
        self.min_token_length = min_token_length

        self._kiwi = kiwi if kiwi is not None else self._create_kiwi(model_type)

        registered = 0
        for word in user_words or ():
            if self._kiwi.add_user_word(word, "NNP"):
                registered += 1

        logger.info(
            "명사 시퀀스 추출기 초기화",
            noun_tags=len(self.noun_tags),
            max_gap=self.max_gap,
            user_words=registered,
        )

    @staticmethod
    def _create_kiwi(model_type: str | None) -> Any:
        try:
            from kiwipiepy import Kiwi

            if model_type:
                return Kiwi(model_type=model_type)
            return Kiwi()
        except Exception as e:
            raise TokenizerError(ErrorCode.TOKENIZER_001, reason=str(e)) from e

    def tokenize(self, text: str) -> list[NounSequence]:
        """
        텍스트에서 인접한 명사 시퀀스를 추출

        Raises:
            TokenizerError: 형태소 분석 호출이 실패한 경우
        """
        if not text or not text.strip():
            return []

        try:
            analyzed = self._kiwi.tokenize(text)
        except Exception as e:
            raise TokenizerError(ErrorCode.TOKENIZER_002, reason=str(e)) from e

        tokens = [
            Token(term=morph.form, start_offset=morph.start, end_offset=morph.start + morph.len)
            for morph in analyzed
            if self._is_noun_tag(morph.tag)
            and is_valid_token(morph.form, self.html_entities, self.min_token_length)
        ]
        tokens.sort(key=lambda token: token.start_offset)

        return group_sequences(tokens, self.max_gap)

    def extract_terms(self, text: str) -> list[list[str]]:
        return [sequence.terms() for sequence in self.tokenize(text)]

    def _is_noun_tag(self, tag: str) -> bool:
        # 불규칙 활용 표시(-I, -R 등)는 태그 비교에서 제외
        return tag.split("-", 1)[0] in self.noun_tags
