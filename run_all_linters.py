#!/usr/bin/env python3
"""執行所有格式檢查、靜態分析與單元測試。

依序執行：
1. Black 格式化檢查（加上 --fix 時直接格式化）
2. isort 匯入排序
3. Ruff 靜態檢查
4. Pylint 靜態分析
5. pytest 單元測試

任何一步失敗時，最後會列出失敗步驟的完整輸出。
"""

from pathlib import Path
import subprocess
import sys

ROOT = Path(__file__).parent
SOURCES = ["app", "core", "infrastructure", "tests", "main.py"]


def build_commands(fix: bool) -> list[tuple[list[str], str]]:
    """依 `fix` 決定要檢查或直接修正。"""
    py = sys.executable
    black = [py, "-m", "black", *SOURCES] + ([] if fix else ["--check"])
    isort = [py, "-m", "isort", *SOURCES] + ([] if fix else ["--check-only"])
    ruff = [py, "-m", "ruff", "check", *SOURCES] + (["--fix"] if fix else [])
    return [
        (black, "Black 格式化"),
        (isort, "isort 匯入排序"),
        (ruff, "Ruff 靜態檢查"),
        ([py, "-m", "pylint", "app", "core", "infrastructure"], "Pylint 靜態分析"),
        ([py, "-m", "pytest", "-q"], "pytest 單元測試"),
    ]


def run_step(cmd: list[str], description: str) -> tuple[bool, str]:
    """執行一個步驟並回傳 (是否成功, 輸出)。"""
    print(f"\n{'=' * 60}")
    print(f"{description}: {' '.join(cmd[1:])}")
    print("=" * 60)

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False, cwd=ROOT)
    except OSError as e:
        print(f"❌ 無法執行: {e}")
        return False, str(e)

    output = result.stdout + result.stderr
    print("✅ 成功" if result.returncode == 0 else "❌ 失敗")
    if output.strip():
        print(output)
    return result.returncode == 0, output


def main() -> None:
    fix = "--fix" in sys.argv[1:]
    results = [(desc, *run_step(cmd, desc)) for cmd, desc in build_commands(fix)]

    print(f"\n{'=' * 60}")
    print("總結")
    print("=" * 60)
    for description, success, _ in results:
        print(f"{description}: {'✅ 通過' if success else '❌ 失敗'}")

    failed = [(d, out) for d, ok, out in results if not ok]
    for description, output in failed:
        if output.strip():
            print(f"\n--- {description} ---")
            print(output)

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
