#!/usr/bin/env python3
"""
Terminal-based calculator (calc.py)

Features:
- Expression evaluation with operator precedence, implicit multiplication
  (3(4), (2)(3)), unary minus, pi/π and e
- Functions sin, cos, tan (degrees), sqrt, log (base 10), ln, exp, abs
- 'ans' token: refers to previous calculation result (error if none)
- Result history with recall
- Keypad functions applied to the last result (apply sqrt, apply 1/x, ...)
- Plotting of functions of x (matplotlib), with pan, zoom and trace
- Settings menu for the graph window
- Commands: quit/exit, help, history, recall, clear, mode, apply, plot,
  pan, zoom, trace, settings/set
"""

import logging
import re
import sys

import matplotlib.pyplot as _plt
from rich import print
from rich.markup import escape
from rich.table import Table

from termcalc.calculator import KEYPAD_FUNCTIONS, Calculator
from termcalc.config import Settings
from termcalc.evaluator import evaluate_expression
from termcalc.errors import CalcError
from termcalc.formatting import format_result
from termcalc.graph import GraphWindow, point_at, sample_points

logger = logging.getLogger(__name__)

_NUMBER = r"([+-]?\d+(?:\.\d*)?)"

# Supported syntaxes:
#   plot <expr> from <start> to <end> [samples N]
#   plot <expr> <start> <end> [N]
#   plot <expr>
_PLOT_RANGE_RE = re.compile(
    r"^\s*(?:plot|graph)\s+(.+?)\s+from\s+%s\s+to\s+%s(?:\s+samples\s+(\d+))?\s*$" % (_NUMBER, _NUMBER),
    re.I,
)
_PLOT_SHORT_RE = re.compile(
    r"^\s*(?:plot|graph)\s+(.+?)\s+%s\s+%s(?:\s+(\d+))?\s*$" % (_NUMBER, _NUMBER),
    re.I,
)
_PLOT_BARE_RE = re.compile(r"^\s*(?:plot|graph)\s+(.+?)\s*$", re.I)

_ANS_RE = re.compile(r"\bans\b")

PLOT_USAGE = (
    "[yellow]Plot syntax: plot (expr) \\[from (start) to (end)] \\[samples N]"
    "  (e.g. plot sin(x) from 0 to 360 samples 400)[/yellow]"
)

HELP = """[yellow]Enter expressions to evaluate. Commands[/yellow]:
[green]quit,
help,
history,
recall N,
clear,
mode,
apply (sin|cos|tan|sqrt|log|ln|exp|abs|1/x|x^2),
plot <expr> \\[from A to B] \\[samples N],
pan DX DY,
zoom FACTOR,
trace X,
settings[/green]"""


def _print_error(message):
    print(f"[red]Error:[/red] {escape(str(message))}")


class Session:
    """State shared by the REPL commands."""

    def __init__(self, settings=None):
        self.settings = settings or Settings()
        self.calculator = Calculator(history_limit=self.settings.history_limit)
        self.previous_result = None
        self.plot_expression = None
        self.window = self.window_from_settings()

    def window_from_settings(self):
        s = self.settings
        return GraphWindow(s.x_min, s.x_max, s.y_min, s.y_max)


def _substitute_ans(line, previous_result):
    if not _ANS_RE.search(line):
        return line
    if previous_result is None:
        raise CalcError("no previous answer available")
    if previous_result in ("Infinity", "NaN"):
        raise CalcError(f"previous answer is not a finite number: {previous_result}")
    return _ANS_RE.sub("(%s)" % previous_result, line)


def _calculate(session, line):
    try:
        line = _substitute_ans(line, session.previous_result)
    except CalcError as e:
        _print_error(e)
        return

    calc = session.calculator
    calc.clear()
    calc.append_text(line)
    result = calc.calculate()
    if result is None:
        print(f"[red]{escape(calc.error_message)}[/red]")
        return
    session.previous_result = result
    print(result)


# -- plotting ---------------------------------------------------------------


def _draw(session):
    expr = session.plot_expression
    window = session.window
    points = sample_points(expr, window, session.settings.samples)
    if not points:
        print(f"[yellow]Nothing to plot: {escape(expr)} is undefined over the window[/yellow]")
        return

    logger.debug("plotting %r over %s with %d points", expr, window, len(points))
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    try:
        _plt.figure()
        _plt.plot(xs, ys, ".")
        _plt.xlim(window.x_min, window.x_max)
        _plt.ylim(window.y_min, window.y_max)
        _plt.xlabel("x")
        _plt.ylabel(expr)
        _plt.title(f"plot: {expr}")
        _plt.axvline(0, color="black")
        _plt.axhline(0, color="black")
        _plt.grid(True)
        _plt.show()
    except Exception as e:
        print("[red]Plot failed:[/red]", escape(str(e)))


def _handle_plot_command(session, line):
    m = _PLOT_RANGE_RE.match(line) or _PLOT_SHORT_RE.match(line)
    bare = None if m else _PLOT_BARE_RE.match(line)
    if not m and not bare:
        print(PLOT_USAGE)
        return

    expr = (m or bare).group(1).strip()
    if expr.lower().startswith("y="):
        expr = expr[2:].strip()

    samples = session.settings.samples
    window = session.window
    if m:
        try:
            window = GraphWindow(float(m.group(2)), float(m.group(3)), window.y_min, window.y_max)
        except ValueError as e:
            print(f"[red]Invalid numeric range for plot: {escape(str(e))}[/red]")
            return
        if m.group(4):
            samples = int(m.group(4))
    if samples < 10 or samples > 10000:
        print("[red]Samples must be between 10 and 10000[/red]")
        return

    session.window = window
    session.settings.samples = samples
    session.plot_expression = expr
    _draw(session)


def _handle_pan(session, args):
    if session.plot_expression is None:
        print("[yellow]Plot an expression first[/yellow]")
        return
    try:
        dx, dy = (float(a) for a in args)
        session.window = session.window.pan(dx, dy)
    except ValueError:
        print("[yellow]Usage: pan DX DY  (steps of 10% of the window)[/yellow]")
        return
    _draw(session)


def _handle_zoom(session, args):
    if session.plot_expression is None:
        print("[yellow]Plot an expression first[/yellow]")
        return
    try:
        (factor,) = args
        session.window = session.window.zoom(float(factor))
    except ValueError:
        print("[yellow]Usage: zoom FACTOR  (>1 zooms in, <1 zooms out)[/yellow]")
        return
    _draw(session)


def _handle_trace(session, args):
    if session.plot_expression is None:
        print("[yellow]Plot an expression first[/yellow]")
        return
    try:
        (x,) = args
        x = float(x)
    except ValueError:
        print("[yellow]Usage: trace X[/yellow]")
        return
    y = point_at(session.plot_expression, x)
    if y is None:
        print(f"x = {format_result(x)}: undefined")
    else:
        print(f"x = {format_result(x)}, y = {format_result(y)}")


# -- history ----------------------------------------------------------------


def _history_table(history):
    table = Table(show_header=True)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Expression")
    table.add_column("Result", style="green")
    table.add_column("Time", style="dim")
    for i, entry in enumerate(history, 1):
        table.add_row(str(i), entry.expression, entry.result, entry.timestamp.strftime("%H:%M:%S"))
    return table


def _handle_recall(session, args):
    calc = session.calculator
    try:
        (index,) = args
        index = int(index) - 1
    except ValueError:
        print("[yellow]Usage: recall N  (see 'history')[/yellow]")
        return
    if not calc.recall(index):
        print(f"[red]No history entry {index + 1}[/red]")
        return
    if calc.error_message:
        print(f"{escape(calc.expression)} = [red]{escape(calc.error_message)}[/red]")
        return
    session.previous_result = calc.result
    print(f"{escape(calc.expression)} = {calc.result}")


def _handle_apply(session, args):
    if len(args) != 1 or args[0] not in KEYPAD_FUNCTIONS:
        print(f"[yellow]Usage: apply ({'|'.join(KEYPAD_FUNCTIONS)})[/yellow]")
        return
    calc = session.calculator
    if session.previous_result is None:
        _print_error("no previous answer available")
        return
    calc.result = session.previous_result
    result = calc.apply_function(args[0])
    if result is None:
        _print_error(f"cannot apply {args[0]} to {calc.result}")
        return
    session.previous_result = result
    print(result)


# -- settings ---------------------------------------------------------------


def _read_range(prompt):
    val = input(prompt).strip().split()
    lo, hi = (float(v) for v in val)
    return lo, hi


def _settings_menu(session):
    settings = session.settings
    while True:
        print(
            f"\nCurrent settings: x=[{settings.x_min}, {settings.x_max}] "
            f"y=[{settings.y_min}, {settings.y_max}] samples={settings.samples}"
        )
        print(
            "[green]Options[/green]: [ 1 ] set x range  [ 2 ] set y range  "
            "[ 3 ] set samples  [ 4 ] reset defaults  [ q ] quit settings"
        )
        try:
            choice = input("settings> ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not choice:
            continue
        try:
            if choice == "1":
                lo, hi = _read_range("Enter x min and max: ")
                GraphWindow(lo, hi, settings.y_min, settings.y_max)
                settings.x_min, settings.x_max = lo, hi
                print("Updated")
            elif choice == "2":
                lo, hi = _read_range("Enter y min and max: ")
                GraphWindow(settings.x_min, settings.x_max, lo, hi)
                settings.y_min, settings.y_max = lo, hi
                print("Updated")
            elif choice == "3":
                n = int(input("Enter samples (10-10000): ").strip())
                if n < 10 or n > 10000:
                    print("Value out of range")
                else:
                    settings.samples = n
                    print("Updated")
            elif choice == "4":
                settings.reset()
                print("Defaults restored")
            elif choice in ("q", "quit", "exit"):
                return
            else:
                print("Unknown option")
                continue
        except ValueError as e:
            print(f"Invalid value: {escape(str(e))}")
            continue
        session.window = session.window_from_settings()


# -- main loop --------------------------------------------------------------


def repl(settings=None):
    session = Session(settings)
    calc = session.calculator
    prompt = "calc> "

    print("\n\nSimple terminal calculator. Type [green]'help'[/green] for commands.\n")
    while True:
        try:
            line = input(prompt).strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not line:
            continue

        command, *args = line.split()
        command = command.lower()
        if command in ("quit", "exit", "q"):
            break
        if command == "help":
            print(HELP)
        elif command == "history":
            if calc.history:
                print(_history_table(calc.history))
            else:
                print("[yellow]History is empty[/yellow]")
        elif command == "recall":
            _handle_recall(session, args)
        elif command == "clear":
            calc.clear_all()
            session.previous_result = None
            print("Cleared history")
        elif command == "mode":
            print(f"Mode: {calc.toggle_mode().value}")
        elif command == "apply":
            _handle_apply(session, args)
        elif command in ("plot", "graph"):
            _handle_plot_command(session, line)
        elif command == "pan":
            _handle_pan(session, args)
        elif command == "zoom":
            _handle_zoom(session, args)
        elif command == "trace":
            _handle_trace(session, args)
        elif command in ("settings", "set"):
            _settings_menu(session)
        else:
            _calculate(session, line)
    return session


def main():
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if len(sys.argv) > 1:
        expr = " ".join(sys.argv[1:])
        # CLI has no previous result available
        if _ANS_RE.search(expr):
            _print_error("no previous answer available")
            sys.exit(1)
        try:
            print(format_result(evaluate_expression(expr)))
        except CalcError as e:
            _print_error(e)
            sys.exit(1)
    else:
        repl(settings)


if __name__ == "__main__":
    main()
