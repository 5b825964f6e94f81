from StreamCombiners.BooleanLogic.TruthTable import TruthTable
from StreamCombiners.BooleanLogic.TermTable import TermTable
from StreamCombiners.BooleanLogic.Expressions import parse_expression, tokenize
from StreamCombiners.BooleanLogic.BooleanFunction import BooleanFunction
