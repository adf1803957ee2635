"""Starter .tailguard.toml template."""

DEFAULT_TOML = """\
# tailguard configuration
version = "1.0"

[scan]
fail_on = "error"          # warning | error; findings at or above this level fail the run
extensions = [".tsx", ".jsx", ".ts", ".js", ".mdx", ".html", ".css"]
max_file_size_kb = 512

[output]
format = "text"            # text | terminal | json | sarif
show_summary = true

[rules]
# enable = ["no-hardcoded-color", "no-v3-gradient-syntax"]   # empty = all enabled
# disable = ["breakpoint-order"]

[ignore]
files = ["node_modules/*", ".next/*", "dist/*"]
# rules = ["no-deprecated-utility"]
# paths = ["components/legacy/*"]

[allowlist]
# patterns = ["text-white", "bg-black"]
"""
