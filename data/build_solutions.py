"""
One-off script: regenerate the SOLUTIONS table in data/solutions.py.

Runs the placement search from sfm.solver for reflection counts
2..MAX_SIZE and rewrites the block between the BEGIN/END GENERATED
markers. Everything else in solutions.py is left untouched.

Run from repo root: python data/build_solutions.py [max_size]
ASCII only, no unicode.
"""
import os
import sys

# Repo root
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from sfm.solver import build_catalog, format_positions

MAX_SIZE = 6
BEGIN_MARKER = "# BEGIN GENERATED"
END_MARKER = "# END GENERATED"
OUT_PATH = "solutions.py"


def render_table(catalog):
    """Format a catalog as the Python source of the SOLUTIONS dict."""
    lines = [BEGIN_MARKER, "SOLUTIONS = {"]
    for size in sorted(catalog):
        lines.append("    {}: [".format(size))
        for index, positions in enumerate(catalog[size]):
            lines.append(
                '        {{"value": {}, "solution": ({}), "name": "{}"}},'.format(
                    index, ", ".join(str(p) for p in positions),
                    format_positions(positions)))
        lines.append("    ],")
    lines.append("}")
    lines.append(END_MARKER)
    return "\n".join(lines)


def replace_generated_block(source, table):
    """Swap the text between the markers (inclusive) for `table`."""
    start = source.index(BEGIN_MARKER)
    end = source.index(END_MARKER) + len(END_MARKER)
    return source[:start] + table + source[end:]


def main():
    max_size = int(sys.argv[1]) if len(sys.argv) > 1 else MAX_SIZE
    catalog = build_catalog(max_size)
    script_dir = os.path.dirname(os.path.abspath(__file__))
    out_path_abs = os.path.join(script_dir, OUT_PATH)
    with open(out_path_abs, "r", encoding="utf-8") as f:
        source = f.read()
    source = replace_generated_block(source, render_table(catalog))
    with open(out_path_abs, "w", encoding="utf-8") as f:
        f.write(source)
    total = sum(len(v) for v in catalog.values())
    print("Wrote {} solutions for sizes 2..{} to {}".format(total, max_size, out_path_abs))


if __name__ == "__main__":
    main()
