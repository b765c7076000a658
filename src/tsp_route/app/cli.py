# tsp_route/app/cli.py
import argparse
import json
import sys
from dataclasses import asdict

from pydantic import ValidationError

from tsp_route.app.build import build
from tsp_route.config.models import ProblemModel
from tsp_route.domain.errors import TspRouteError
from tsp_route.runtime.types import Heuristic


def _result_json(result) -> dict:
    d = asdict(result)
    d["path"] = [n["id"] for n in d["path"]]
    if d["route"] is not None:
        d["route"] = [[n["x"], n["y"]] for n in d["route"]]
    return d


def parse_args(argv=None):
    ap = argparse.ArgumentParser(
        prog="tsp-route", description="Approximate visiting orders for a set of locations."
    )
    ap.add_argument("problem", help="JSON file holding a ProblemModel")
    ap.add_argument(
        "--heuristic",
        action="append",
        choices=[h.value for h in Heuristic],
        help="heuristic to run (repeatable); defaults to all of them",
    )
    ap.add_argument("--seed", type=int, default=None, help="override the problem seed")
    ap.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    with open(args.problem) as f:
        raw = json.load(f)
    if args.seed is not None:
        raw["seed"] = args.seed
    if args.log_level is not None:
        raw.setdefault("log", {})["level"] = args.log_level

    try:
        model = ProblemModel.model_validate(raw)
    except ValidationError as e:
        print(e, file=sys.stderr)
        return 2

    planner = build(model, run_id=args.problem)
    names = args.heuristic or [h.value for h in Heuristic]
    try:
        out = {name: _result_json(planner.solve(name)) for name in names}
    except TspRouteError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    json.dump(out, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
