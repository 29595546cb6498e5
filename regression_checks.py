from calculator_engine import ERROR, compute, sanitize_number
from calculator_session import CalculatorSession
import sys


def _split_keys(sequence: str) -> list[str]:
	"""Separa "12+3=" en teclas; acepta etiquetas largas separadas por espacios."""
	if " " in sequence.strip():
		return sequence.split()
	return list(sequence)


def _walk(sequence: str):
	session = CalculatorSession()
	states = []

	for label in _split_keys(sequence):
		session.press(label)
		states.append((label, session.display, session.previous_line))

	return session, states


def inspect_keys(sequence: str) -> None:
	"""Imprime la pantalla después de cada tecla."""
	session, states = _walk(sequence)

	print("Key inspection")
	print(f"keys:           {sequence}")
	print(f"total presses:  {len(states)}")
	for i, (label, display, previous) in enumerate(states, start=1):
		print(f"  {i:>2}. {label:<4} {previous:>20} | {display}")
	print(f"memory:         {session.memory_label}")
	if session.history:
		print("history:")
		for entry in session.history:
			print(f"  {entry}")


def _display_after(sequence: str) -> str:
	session, _ = _walk(sequence)
	return session.display


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	session, _ = _walk("7×6=")
	expected_actual.append(("7×6=", "42", session.display))
	checks.append(("7 × 6 shows 42", session.display == "42"))
	checks.append(("7 × 6 previous line", session.previous_line == "7 × 6 ="))

	_, states_repeat = _walk("5+3==")
	displays = [display for _, display, _ in states_repeat]
	checks.append(("repeated equals gives 8 then 11", displays[-2:] == ["8", "11"]))

	end_decimal = _display_after("1.5+2.5=")
	expected_actual.append(("1.5+2.5=", "4", end_decimal))
	checks.append(("1.5 + 2.5 is 4", end_decimal == "4"))

	checks.append(("0 ÷ 0 is Error", _display_after("÷0=") == ERROR))
	checks.append(("divide by zero via compute", compute("9", "÷", "0") == ERROR))

	long_entry = _display_after("12345678901234567")
	checks.append(("17th digit ignored", long_entry == "1234567890123456"))

	session, _ = _walk("5⌫")
	checks.append(("backspace collapses to 0", session.display == "0"))
	checks.append(("backspace clears typing", not session.state.is_typing))

	end_float = _display_after(".1+.2=")
	expected_actual.append((".1+.2=", "0.3", end_float))
	checks.append(("0.1 + 0.2 rounds to 0.3", end_float == "0.3"))

	checks.append(("sanitize -0", sanitize_number("-0") == "0"))
	checks.append(("sanitize garbage", sanitize_number("abc") == ERROR))
	checks.append(("sanitize large stays positional", sanitize_number("1e21") == "1" + "0" * 21))
	checks.append(("tiny percent keeps digit entry", _display_after("0.00001%5") == "0.00000015"))

	checks.append(("error recovers on digit", _display_after("1÷0=4") == "4"))
	checks.append(("sqrt of negative", _display_after("4 +/- √") == ERROR))

	failed = [name for name, ok in checks if not ok]

	print("Regression checks")
	for name, ok in checks:
		print(f"[{'OK' if ok else 'FAIL'}] {name}")

	if expected_actual:
		print("\nExpected vs actual:")
	for label, expected, actual in expected_actual:
		print(f"- {label}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "5+3=="
	#   python regression_checks.py --inspect "9 √ M+ AC MR"
	if "--inspect" in sys.argv:
		try:
			keys = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing key sequence after --inspect")

		inspect_keys(keys)
	else:
		run_regressions()
