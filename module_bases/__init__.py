import logging

from . import config
from .field import Field, FiniteField, Rationals, ZeroRing
from .index import (ADJOINED, ALEPH_0, AbstractIndexSet, Cardinal, ExtendedIndexSet, FiniteIndexSet, IndexSet,
                    NaturalNumbers)
from .coefficients import SparseCoefficients
from .module import CoordinateSpace, FreeModule, ModuleSpace
from .basis import Basis
from .family import LinearlyIndependentFamily
from .support import SupportCover, arbitrary_union_of_supports, finite_union_of_supports
from .finiteness import FiniteSpanCertificate, basis_is_finite_given_finite_span, finite_span_certificate
from .maximality import Extension, MaximalityChecker, supports_cover_all
from .cardinality import CardinalInequality, CardinalityComparator, cardinality_bound
from .errors import LogicInconsistency, ModuleBasesError, NotFinite, PreconditionViolation

logging.getLogger(__name__).addHandler(logging.NullHandler())
logging.getLogger(__name__).setLevel(config.LOG_LEVEL)

__all__ = [
    'Field', 'FiniteField', 'Rationals', 'ZeroRing',
    'ADJOINED', 'ALEPH_0', 'AbstractIndexSet', 'Cardinal', 'ExtendedIndexSet', 'FiniteIndexSet', 'IndexSet',
    'NaturalNumbers',
    'SparseCoefficients', 'CoordinateSpace', 'FreeModule', 'ModuleSpace', 'Basis', 'LinearlyIndependentFamily',
    'SupportCover', 'arbitrary_union_of_supports', 'finite_union_of_supports',
    'FiniteSpanCertificate', 'basis_is_finite_given_finite_span', 'finite_span_certificate',
    'Extension', 'MaximalityChecker', 'supports_cover_all',
    'CardinalInequality', 'CardinalityComparator', 'cardinality_bound',
    'LogicInconsistency', 'ModuleBasesError', 'NotFinite', 'PreconditionViolation',
]
