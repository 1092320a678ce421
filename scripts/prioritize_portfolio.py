"""Run the AI Strategic Prioritizer from the terminal.

Usage:
    python scripts/prioritize_portfolio.py configure --provider openai --api-key sk-...
    python scripts/prioritize_portfolio.py run --excel use_cases.xlsx
    python scripts/prioritize_portfolio.py run --demo --answers 2,2,3,1,2
    python scripts/prioritize_portfolio.py run --demo --exclude demo-3

Walks through the maturity quiz (or takes --answers), collects use cases from
an Excel file and/or the demo set, and prints the analysis. The provider key
is cached locally, like the browser client's local storage, and only ever
sent to the provider itself.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from app.chains.analyze_portfolio import AIProviderError, analyze_portfolio
from app.chains.validate_api_key import validate_api_key
from app.core.config import get_settings
from app.core.credential_store import CredentialStore
from app.core.excel_import import ExcelImportError, import_use_cases
from app.core.maturity import QUESTIONS, score_assessment
from app.core.schemas_prioritizer import AnalysisResult, MaturityProfile, UseCaseGroup
from app.core.use_cases import DEMO_USE_CASES, remove_use_case


def _ask_quiz() -> list[int]:
    answers = []
    for question in QUESTIONS:
        print(f"\n{question.category} ({question.id}/{len(QUESTIONS)}): {question.text}")
        for option in question.options:
            print(f"  {option.score}) {option.text}")
        while True:
            choice = input("Select 1-4: ").strip()
            if choice in {"1", "2", "3", "4"}:
                answers.append(int(choice))
                break
    return answers


def _print_result(maturity: MaturityProfile, result: AnalysisResult) -> None:
    print(f"\nMaturity: {maturity.level.value} ({maturity.score}/100)")
    print(f"\nExecutive summary:\n{result.executive_summary}")

    for group in UseCaseGroup:
        members = [uc for uc in result.analyzed_use_cases if uc.group == group]
        if not members:
            continue
        print(f"\n== {group.value} ==")
        for uc in sorted(members, key=lambda u: u.impact_score, reverse=True):
            print(
                f"- {uc.title} [{uc.department}] impact={uc.impact_score:g} "
                f"feasibility={uc.feasibility_score:g} risk={uc.risk_score:g}"
            )
            print(f"  {uc.reasoning}")
            for step_no, step in enumerate(uc.implementation_steps, start=1):
                print(f"  {step_no}. {step}")


async def configure(args: argparse.Namespace) -> int:
    store = CredentialStore(args.store)
    check = await validate_api_key(args.provider, args.api_key)
    print(check.message)
    if check.status != "valid":
        return 1
    store.save(args.api_key, args.provider)
    print(f"Saved credentials to {store.path}")
    return 0


async def run(args: argparse.Namespace) -> int:
    api_key, provider = CredentialStore(args.store).load()
    if not api_key:
        print("No API key configured. Run the 'configure' command first.")
        return 1

    try:
        answers = [int(a) for a in args.answers.split(",")] if args.answers else _ask_quiz()
        maturity = score_assessment(answers)
    except ValueError as e:
        print(f"Invalid answers: {e}")
        return 1

    use_cases = list(DEMO_USE_CASES) if args.demo else []
    if args.excel:
        try:
            use_cases.extend(import_use_cases(Path(args.excel).read_bytes(), args.excel))
        except ExcelImportError as e:
            print(e)
            return 1

    for use_case_id in filter(None, (args.exclude or "").split(",")):
        use_cases = remove_use_case(use_cases, use_case_id.strip())

    if not use_cases:
        print("No use cases to analyze. Pass --excel and/or --demo.")
        return 1

    print(f"\nAnalyzing {len(use_cases)} use case(s) with {provider}...")
    try:
        result = await analyze_portfolio(maturity, use_cases, api_key, provider)
    except AIProviderError as e:
        print(f"Analysis failed: {e}")
        return 1

    _print_result(maturity, result)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="AI Strategic Prioritizer")
    parser.add_argument(
        "--store", default=get_settings().CREDENTIAL_STORE_PATH, help="Credential cache file"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    conf = sub.add_parser("configure", help="Validate and cache a provider key")
    conf.add_argument("--provider", choices=["google", "openai"], default="google")
    conf.add_argument("--api-key", required=True)

    run_p = sub.add_parser("run", help="Assess maturity and analyze use cases")
    run_p.add_argument("--excel", help="Workbook with Title/Department/Description columns")
    run_p.add_argument("--demo", action="store_true", help="Include the demo use cases")
    run_p.add_argument("--answers", help="Comma-separated quiz answers, e.g. 2,2,3,1,2")
    run_p.add_argument("--exclude", help="Comma-separated use case ids to drop, e.g. demo-2")

    args = parser.parse_args()
    handler = configure if args.command == "configure" else run
    return asyncio.run(handler(args))


if __name__ == "__main__":
    sys.exit(main())
