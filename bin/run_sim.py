#!/usr/bin/env python3
from devdeck.config import build_config_from_cli
from devdeck.engine.loop import run_many
from devdeck.errors import ConfigError
import json, sys

if __name__ == "__main__":
    try:
        cfg, args = build_config_from_cli()
    except ConfigError as e:
        print(f"[config] invalid rule set: {e}")
        sys.exit(2)
    out = run_many(cfg, games=args.games)
    print(json.dumps(out.to_dict(), indent=2))
