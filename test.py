"""
접수 텍스트 추출 테스트 러너

JSON 파일에서 샘플 입력을 로드하고 추출 결과를 JSON으로 저장합니다.

사용법:
    python test.py                          # 기본 실행
    python test.py --input custom.json      # 커스텀 입력 파일
    python test.py --output results.json    # 커스텀 출력 파일
"""

import json
import argparse
from datetime import datetime
from pathlib import Path

from intake.assembly.assembler import WITHDRAWAL_ASSEMBLER, clean_record
from intake.assembly.consultation import extract_consultations


# 기본 경로
DEFAULT_INPUT = Path(__file__).parent / "tests" / "fixtures" / "intake_samples.json"
DEFAULT_OUTPUT = Path(__file__).parent / "tests" / "fixtures" / "intake_results.json"


def load_test_cases(input_path: Path) -> list[dict]:
    """JSON 파일에서 테스트 케이스 로드"""
    with open(input_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return data.get("test_cases", [])


def run_single_test(test_case: dict) -> dict:
    """단일 테스트 케이스 실행"""
    kind = test_case.get("kind", "withdrawal")

    if kind == "consultation":
        actual = {"records": extract_consultations(test_case["input"])}
    else:
        ctx = WITHDRAWAL_ASSEMBLER.parse(test_case["input"])
        actual = {
            "record": clean_record(ctx.record),
            "rules": list(ctx.applied),
            "category_tier": ctx.classification.tier if ctx.classification else None,
            "extractions": [
                {
                    "field": r.field_name,
                    "label": r.extractor,
                    "value": r.value,
                    "evidence": r.evidence,
                }
                for r in ctx.trace.results
            ],
        }

    return {
        "id": test_case["id"],
        "name": test_case["name"],
        "kind": kind,
        "input": test_case["input"],
        "expected": test_case.get("expected", {}),
        "actual": actual,
    }


def count_mismatches(result: dict) -> int:
    """expected에 적힌 필드 중 실제 값과 다른 개수"""
    expected = result["expected"]
    actual = result["actual"]

    if result["kind"] == "consultation":
        count = expected.get("count")
        return 0 if count is None or count == len(actual["records"]) else 1

    record = actual["record"]
    return sum(1 for key, value in expected.items() if record.get(key) != value)


def save_results(results: dict, output_path: Path) -> None:
    """테스트 결과를 JSON 파일로 저장"""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(results, f, ensure_ascii=False, indent=2)


def run_tests(input_path: Path, output_path: Path) -> dict:
    """모든 테스트 실행 및 결과 저장"""
    test_cases = load_test_cases(input_path)

    results = {
        "metadata": {
            "input_file": str(input_path),
            "output_file": str(output_path),
            "timestamp": datetime.now().isoformat(),
            "total_tests": len(test_cases),
        },
        "results": [],
    }

    print(f"테스트 입력: {input_path}")
    print(f"테스트 개수: {len(test_cases)}개")
    print("=" * 60)

    for test_case in test_cases:
        print(f"\n[{test_case['id']}] {test_case['name']}")
        print("-" * 40)

        result = run_single_test(test_case)
        results["results"].append(result)

        # 콘솔 출력
        actual = result["actual"]
        if result["kind"] == "consultation":
            print(f"  records: {len(actual['records'])}건")
            for record in actual["records"]:
                print(f"    - {record.get('name')}: {record}")
        else:
            print(f"  category_tier: {actual['category_tier']}")
            print(f"  rules: {', '.join(actual['rules']) or '-'}")
            for key, value in actual["record"].items():
                print(f"    - {key}: {value!r}")

        mismatches = count_mismatches(result)
        print(f"  불일치: {mismatches}개")

    # 결과 저장
    save_results(results, output_path)
    print("\n" + "=" * 60)
    print(f"결과 저장: {output_path}")

    return results


def main():
    parser = argparse.ArgumentParser(description="접수 텍스트 추출 테스트 러너")
    parser.add_argument(
        "--input", "-i",
        type=Path,
        default=DEFAULT_INPUT,
        help="테스트 입력 JSON 파일 경로"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=DEFAULT_OUTPUT,
        help="테스트 결과 JSON 파일 경로"
    )
    args = parser.parse_args()

    run_tests(args.input, args.output)


if __name__ == "__main__":
    main()
