import json
import logging
from argparse import ArgumentParser

from . import config
from .basis import Basis
from .cardinality import cardinality_bound
from .errors import ModuleBasesError
from .family import LinearlyIndependentFamily
from .field import FiniteField, Rationals
from .finiteness import finite_span_certificate
from .index import NaturalNumbers
from .module import CoordinateSpace, FreeModule


def run_coordinate_space(field) -> dict:
    """F^3 with basis e1, e2, e3 and spanning set e1+e2, e2+e3, e1+e3."""
    space = CoordinateSpace(field, 3)
    basis = Basis.standard(space)
    spanning_set = [space.element(v) for v in ([1, 1, 0], [0, 1, 1], [1, 0, 1])]

    logging.info("Checking finite span in %s", space)
    certificate = finite_span_certificate(spanning_set, basis)
    return {"space": str(space), "certificate": certificate.to_dict()}


def run_naturals() -> dict:
    """Telescoping basis of Q^(ℕ) against the maximal family of unit vectors."""
    module = FreeModule(Rationals(), NaturalNumbers())
    basis = Basis.telescoping(module)
    # Unit vector e_k has telescoping coordinates 1 at labels 0..k, so label i is used by e_i
    family = LinearlyIndependentFamily(module, module.unit, index_set=module.index_set, name="units",
                                       locate=lambda i: i)

    logging.info("Bounding %s by %s", basis, family)
    inequality = cardinality_bound(basis, family, maximal=True, basis_infinite=True)
    return {"basis": str(basis), "family": str(family), "inequality": inequality.to_dict()}


def main(argv=None) -> int:
    parser = ArgumentParser(description="Run the basis finiteness and cardinality scenarios")
    parser.add_argument("--scenario", choices=["span", "naturals", "all"], default="all", help="Scenario to run")
    parser.add_argument("--characteristic", type=int, default=0,
                        help="Field characteristic for the span scenario (0 for the rationals)")
    parser.add_argument("--probes", type=int, default=config.PROBE_COUNT,
                        help="Labels probed when a basis and a family are both infinite")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s - %(levelname)s - %(message)s")
    config.PROBE_COUNT = args.probes

    results = {}
    try:
        if args.scenario in ("span", "all"):
            field = Rationals() if args.characteristic == 0 else FiniteField(args.characteristic)
            results["span"] = run_coordinate_space(field)
        if args.scenario in ("naturals", "all"):
            results["naturals"] = run_naturals()
    except ModuleBasesError as e:
        logging.error("Scenario failed: %s", e)
        return 1

    print(json.dumps(results, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
