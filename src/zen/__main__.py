from .editor import run

raise SystemExit(run())
