"""
목적:
- 엔진 API 오류 코드를 사람이 읽을 수 있는 설명으로 변환한다.

설명:
- 엔진은 음수 정수로 오류를 알린다. 절댓값은
  심각도(0~2) * 100000 + 분류(0~3) * 10000 + 오류 번호 로 구성된다.
- 오류 번호는 아래 표의 인덱스와 같다. 표 밖의 번호는 "정의되지 않은 오류"로 처리한다.
- 0 이상 값은 오류가 아니다.

디자인 패턴:
- 조회 테이블(Lookup Table).

참조:
- src_py/qbash_stream/orchestration/harness.py
- src_py/qbash_stream/dispatch/dispatcher.py
"""

from __future__ import annotations

from dataclasses import dataclass

SEVERITY_NAMES = ("Warning", "Error", "Fatal")
CATEGORY_NAMES = ("Unknown", "I/O", "Memory", "Syscall")

_ERROR_TABLE: tuple[tuple[int, str], ...] = (
    (0, "No error."),
    (1, "Undefined error code.  (Must be an internal code fault.)"),
    (220002, "Failed to allocate memory for vptra initialize_qoenv_mappings()"),
    (3, "Empty or invalid option=value string in assign_one_arg()"),
    (4, "Unrecognized option in assign_one_arg()"),
    (220005, "Failed to allocate memory in assign_one_arg()"),
    (210006, "Failed to open file for reading."),
    (210007, "Failed to stat file in mmap_all_of()"),
    (210008, "Failed to createFileMapping in mmap_all_of()"),
    (210009, "Failed to MapViewOfFile in mmap_all_of()"),
    (200010, "Internal sanity test failed: Doctable width is not 8 bytes"),
    (200011, "Internal sanity test failed: Doctable MASK and MASK2 don't match."),
    (200012, "Internal sanity test failed: Doctable fields don't add to totbits."),
    (200013, "Internal sanity test failed: DOCOFF_SHIFT has wrong value."),
    (200014, "Internal sanity test failed: DOCSCORE_SHIFT has wrong value."),
    (200015, "Internal sanity test failed: DOCBLOOM_SHIFT has wrong value."),
    (200016, "Internal sanity test failed: Doctable entries are not 8 bytes long."),
    (200017, "Internal sanity test failed: test_doctable_n_forward()."),
    (18, "Internal sanity test failed: invalid arguments passed to show_postings()."),
    (19, "Internal sanity test failed: unable to get_doc() in show_postings()."),
    (200020, "Internal sanity test failed: skip block macros (a)."),
    (200021, "Internal sanity test failed: skip block macros (b)."),
    (200022, "Internal sanity test failed: skip block macros (c)."),
    (200023, "Internal sanity test failed: skip block macros (d)."),
    (200024, "Internal sanity test failed: test for is_prefix_match()."),
    (200025, "Index format error.  Format header line in .if."),
    (26, "Index is in old format.  Handling in compatibility mode."),
    (200027, "Index is in old format.  Unable to handle using compatibility mode."),
    (200028, "Index format error.  Query_meta_chars header line in .if."),
    (200029, "Index format error.  Incompatible set of query_meta_chars."),
    (200030, "Index format error.  Other_token_breakers."),
    (200031, "Size of index file has changed since indexing: .forward"),
    (200032, "Size of index file has changed since indexing: .dt"),
    (200033, "Size of index file has changed since indexing: .vocab"),
    (200034, "Size of index file has changed since indexing: .if"),
    (35, "Internal sanity test failed: word lookup failed."),
    (36, "Internal sanity test failed: test_is_duplicate() failed."),
    (220037, "Failed to allocate memory for book_keeping_structure for current query. Can't proceed."),
    (20038, "Failed to allocate memory for local options.  Using global ones instead."),
    (20039, "No longer used."),
    (220040, "Failed to allocate memory for query results in handle_query()."),
    (41, "Empty query."),
    (220402, "Failed to allocate memory for candidate result blocks."),
    (220403, "Failed to allocate memory for rank_only_counts array."),
    (220404, "Failed to allocate memory for candidates result block array."),
    (220045, "Failed to allocate memory for rank_only_counts array."),
    (100046, "Invalid arguments to saat_setup()."),
    (220047, "Failed to allocate memory for term blocks in saat_setup()."),
    (48, "Invalid arguments to saat_advance_within_doc()."),
    (49, "Invalid arguments to saat_skipto()."),
    (100050, "Query longer than MAX_WDS_IN_QUERY (32) words in possibly_record_candidate()."),
    (200051, "Internal error.  Number of signature bits requested exceeds 64."),
    (220052, "Failed to allocate memory for term copy in saat_setup_disjunction()."),
    (53, "Malformed disjunction in query."),
    (220054, "Failed to allocate memory for saat_block in saat_setup_disjunction()."),
    (220055, "Failed to allocate memory for term copy in saat_setup_phrase()."),
    (56, "Malformed phrase in query."),
    (220057, "Failed to allocate memory for saat_block in saat_setup_phrase()."),
    (100058, "Invalid parameters to saat_relaxed_and()."),
    (220059, "Failed to allocate memory for recorded in saat_relaxed_and()."),
    (100060, "No longer used."),
    (220061, "No longer used."),
    (200062, "Invalid qoenv on call to load_indexes()."),
    (200063, "Failed to allocate memory in load_indexes()."),
    (200064, "If index_dir is not given, all four index files must be individually specified."),
    (200065, "It is not permitted to specify both index_dir and individual input/output files."),
    (210066, "Unable to open file_output for writing."),
    (200067, "Object Store: internal tests failed."),
    (200068, "Object Store: QBASHQ_LIB.dll must be built for 64 bit architecture but isn't."),
    (220069, "Object Store: Failed to create a query processing environment."),
    (220070, "Object Store: Unable to allocate memory for filename."),
    (200071, "Object Store: Unrecognized file passed to NativeInitializeSharedFiles()"),
    (200072, "Object Store: Incomplete file list passed to NativeInitializeSharedFiles()."),
    (200073, "Internal sanity test failed: test_tailstr()."),
    (200074, "Internal sanity test failed: test_substitute()."),
    (200075, "Internal sanity test failed: bag similarity calculations."),
    (200076, "Internal sanity test failed: prefix signature test."),
    (200077, "Internal sanity test failed: signature test."),
    (78, "Internal sanity test failed: zero skip block length in show_postings()."),
    (20079, "Failed to allocate memory for substitution rules.  Substitutions turned off."),
    (23080, "Error return from WideCharToMultiByte() in NativeExecuteQueryAsync()."),
)

_UNDEFINED_INDEX = 1


@dataclass(slots=True, frozen=True)
class ErrorExplanation:
    """오류 코드 해석 결과 모델."""

    code: int
    severity: str
    category: str
    message: str

    def __str__(self) -> str:
        return f"{self.severity} - {self.category} - {self.message}"


def explain_error(code: int) -> ErrorExplanation:
    """엔진 오류 코드를 표 항목으로 해석한다."""
    if code >= 0:
        _, message = _ERROR_TABLE[0]
        return ErrorExplanation(code=code, severity=SEVERITY_NAMES[0], category=CATEGORY_NAMES[0], message=message)

    index = (-code) % 100_000 % 10_000
    if index >= len(_ERROR_TABLE):
        index = _UNDEFINED_INDEX

    table_code, message = _ERROR_TABLE[index]
    severity = min(table_code // 100_000, len(SEVERITY_NAMES) - 1)
    category = min(table_code % 100_000 // 10_000, len(CATEGORY_NAMES) - 1)
    return ErrorExplanation(
        code=code,
        severity=SEVERITY_NAMES[severity],
        category=CATEGORY_NAMES[category],
        message=message,
    )


def is_fatal(code: int) -> bool:
    """호출자가 시스템 재설정을 고려해야 하는 치명적 오류인지 판정한다."""
    return code < 0 and explain_error(code).severity == SEVERITY_NAMES[2]
