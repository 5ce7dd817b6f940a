#!/usr/bin/env python3
"""
Basic proofcheck Usage Example

This example demonstrates the core workflow:
1. Check a manuscript with default settings
2. Point the run at dictionary, good-word and he/be data files
3. Inspect individual report sections
4. Write the combined text report
5. Check several manuscripts at once
"""

from pathlib import Path

from proofcheck import CheckConfig, SpellcheckConfig, check, check_batch, check_file, render_text
from proofcheck.spelling import Dictionary


def main():
    # ─────────────────────────────────────────────────────────────────────────
    # 1. In-memory Check
    # ─────────────────────────────────────────────────────────────────────────

    dictionary = Dictionary.from_words(["the", "cloud", "hung", "over", "house"])
    report = check("The clond hung over the house.\n\nThe cloud.\n", dictionary=dictionary)

    print(f"Checked: {report.source}")
    print(f"  Findings: {report.total_findings}")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Data Files and Configuration
    # ─────────────────────────────────────────────────────────────────────────

    config = CheckConfig(
        dictionary_path="data/words.txt",  # One word per line
        good_words_path="data/good_words.txt",  # Project-specific words
        hebe_path="data/hebelist.txt",  # he/be phrase frequencies
        spellcheck=SpellcheckConfig(
            frequency_amnesty=4,  # Words seen this often are approved
            max_workers=4,  # Parallel edit-distance search
        ),
    )

    # Or load the same settings from YAML
    # config = CheckConfig.from_yaml("proofcheck.yaml")

    report = check_file("path/to/manuscript.txt", config=config)

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Report Sections
    # ─────────────────────────────────────────────────────────────────────────

    for section in report.sections:
        status = "FAILED" if section.failed else f"{section.findings} findings"
        print(f"  {section.name}: {status}")

    jeebies = report.section("jeebies")
    if jeebies is not None:
        print("\n".join(jeebies.lines))

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Text Report
    # ─────────────────────────────────────────────────────────────────────────

    Path("output").mkdir(exist_ok=True)
    Path("output/manuscript-report.txt").write_text(render_text(report), encoding="utf-8")


def batch_check_example():
    """Check every manuscript in a directory with one set of data files."""
    config = CheckConfig(dictionary_path="data/words.txt", hebe_path="data/hebelist.txt")

    for path, result in check_batch(sorted(Path("manuscripts/").glob("*.txt")), config):
        if isinstance(result, Exception):
            print(f"{path.name}: FAILED ({result})")
        else:
            print(f"{path.name}: {result.total_findings} findings")
            Path(f"output/{path.stem}-report.txt").write_text(
                render_text(result), encoding="utf-8"
            )


if __name__ == "__main__":
    # Note: These examples use placeholder paths.
    # Replace with actual manuscript and data paths to run.
    print("proofcheck Usage Examples")
    print("=" * 50)
    print("\nSee the code for detailed examples of:")
    print("  - In-memory checks")
    print("  - Data files and configuration")
    print("  - Report sections")
    print("  - Batch checking")
