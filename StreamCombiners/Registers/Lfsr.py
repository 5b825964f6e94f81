import json
import logging

from StreamCombiners.Bitwise import BitVector
from StreamCombiners.Config import LONG_WIDTH
from StreamCombiners.Errors import BitIndexError, VectorLengthError, WidthError

logger = logging.getLogger(__name__)


class Lfsr:
    """A Fibonacci linear feedback shift register.

    The fill and taps are both `BitVector`s of the register's length. Index 0
    of the fill is the bit output by the next shift; higher indices are deeper
    in the register. Each shift outputs the XOR of every fill bit whose tap is
    set, drops the bit at index 0, moves the rest down one index and writes the
    output bit back in at the top.

    Registers are mutable and not safe to share between threads; use one
    instance per stream.
    """

    #INITIALIZATION/DATA:
    def __init__(self, length: int, fill: BitVector | int | None = None, taps: BitVector | int | None = None):
        if length < 1:
            raise ValueError(f"register length must be positive, got {length}")
        self._length = length
        self._fill = BitVector(length)
        self._taps = BitVector(length)
        self._seed = self._fill

        if fill is not None:
            self.set_fill(fill)
        if taps is not None:
            self.set_taps(taps)

    @property
    def length(self) -> int:
        return self._length

    def get_length(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    # BitVectors are immutable, so handing out the stored vector is as safe as a copy
    @property
    def fill(self) -> BitVector:
        return self._fill

    @property
    def taps(self) -> BitVector:
        return self._taps

    def get_fill(self) -> BitVector:
        return self._fill

    def get_taps(self) -> BitVector:
        return self._taps

    def get_fill_at(self, index: int) -> int:
        return self._fill.get(index)

    def get_tap_at(self, index: int) -> int:
        return self._taps.get(index)


    #REGISTER CONFIGURATION:
    def _to_vector(self, value: BitVector | int, name: str) -> BitVector:
        if isinstance(value, BitVector):
            if len(value) != self._length:
                raise VectorLengthError(len(value), self._length)
            return value

        if isinstance(value, int):
            # an integer cannot describe every position of a longer register
            if self._length > LONG_WIDTH:
                raise WidthError(
                    LONG_WIDTH,
                    f"cannot set the {name} of a {self._length} bit register "
                    f"from a {LONG_WIDTH} bit integer"
                )
            return BitVector.from_value(self._length, value)

        raise TypeError(f"{name} must be a BitVector or an int, not {type(value).__name__}")

    def set_fill(self, fill: BitVector | int) -> None:
        """Replace the fill of the register.

        The fill set here also becomes the seed that `reset()` returns to.

        :raises VectorLengthError: if a BitVector of the wrong length is given
        :raises WidthError: if an int is given for a register longer than 64 bits
        """
        self._fill = self._to_vector(fill, "fill")
        self._seed = self._fill
        logger.debug("fill set to %s", self._fill)

    def set_taps(self, taps: BitVector | int) -> None:
        """Replace the tap configuration of the register.

        :raises VectorLengthError: if a BitVector of the wrong length is given
        :raises WidthError: if an int is given for a register longer than 64 bits
        """
        self._taps = self._to_vector(taps, "taps")
        logger.debug("taps set to %s", self._taps)

    def set_fill_at(self, index: int, value: int) -> None:
        self._fill = self._fill.with_bit(index, value)
        self._seed = self._fill

    def set_tap_at(self, index: int, value: int) -> None:
        self._taps = self._taps.with_bit(index, value)

    def reset(self) -> None:
        """Return the fill to the last value given to `set_fill`/`set_fill_at`."""
        self._fill = self._seed


    #CLOCKING THE REGISTER:
    def _feedback(self, fill: BitVector) -> int:
        return (fill & self._taps).parity()

    def _clock(self, fill: BitVector) -> tuple[int, BitVector]:
        output = self._feedback(fill)
        return output, fill.shifted_down(output)

    @staticmethod
    def _check_terms(terms: int) -> None:
        if terms < 0:
            raise BitIndexError(terms, what = "term")

    def peek(self, terms: int | None = None) -> int | list[int]:
        """Return upcoming output bits without changing the fill.

        With no argument, returns the bit the next shift would output.
        Otherwise returns a list of the next `terms` output bits.
        """
        if terms is None:
            return self._feedback(self._fill)

        self._check_terms(terms)
        scratch = self._fill
        outputs = []
        for _ in range(terms):
            output, scratch = self._clock(scratch)
            outputs.append(output)
        return outputs

    def peek_at(self, term: int) -> int:
        """Return the output bit at zero-based position `term` without changing the fill."""
        self._check_terms(term)
        scratch = self._fill
        for _ in range(term):
            _, scratch = self._clock(scratch)
        return self._feedback(scratch)

    def shift(self, terms: int | None = None) -> int | list[int]:
        """Shift the register and return the output.

        With no argument, performs one shift and returns its output bit.
        Otherwise performs `terms` shifts and returns the list of outputs.
        """
        if terms is None:
            output, self._fill = self._clock(self._fill)
            return output

        self._check_terms(terms)
        outputs = []
        for _ in range(terms):
            output, self._fill = self._clock(self._fill)
            outputs.append(output)
        return outputs

    def shift_to(self, term: int) -> int:
        """Perform `term + 1` shifts and return the last output bit.

        Leaves the register in the same state as `shift(term + 1)`.
        """
        self._check_terms(term)
        for _ in range(term + 1):
            output, self._fill = self._clock(self._fill)
        return output

    # generate output bits, in order
    def run(self, limit: int | None = None):
        if limit is None:
            while True:
                yield self.shift()
        else:
            self._check_terms(limit)
            for _ in range(limit):
                yield self.shift()


    #DIAGNOSTIC AND EXTRA INFO:
    def period(self, limit: int = 2**18) -> int | None:
        """Return the number of shifts until the fill first repeats.

        The fill is left untouched. Returns None if the starting fill does not
        come back within `limit` shifts. A register whose tap at index 0 is
        clear is not invertible, so most of its fills never come back.
        """
        start = self._fill
        _, curr = self._clock(start)
        count = 1
        while curr != start:
            if count >= limit:
                return None
            _, curr = self._clock(curr)
            count += 1
        return count

    def copy(self) -> "Lfsr":
        output = Lfsr(self._length, self._seed, self._taps)
        output._fill = self._fill
        return output

    def __str__(self) -> str:
        return str(self._fill)

    def __repr__(self) -> str:
        return f"Lfsr({self._length}, fill='{self._fill}', taps='{self._taps}')"


    #SERIALIZATION:
    def to_JSON(self) -> dict:
        # bit lists are stored in index order
        return {
            'class': type(self).__name__,
            'data': {
                'length': self._length,
                'fill': self._fill.to_list(),
                'taps': self._taps.to_list(),
                'seed': self._seed.to_list(),
            }
        }

    @classmethod
    def from_JSON(cls, JSON_object: dict) -> "Lfsr":
        if JSON_object.get('class') != cls.__name__:
            raise TypeError(f"Type '{JSON_object.get('class')}' is not a valid {cls.__name__}")

        data = JSON_object['data']
        output = cls(data['length'])
        output.set_fill(BitVector.from_bits(*data['seed']))
        output.set_taps(BitVector.from_bits(*data['taps']))

        fill = BitVector.from_bits(*data['fill'])
        if len(fill) != output._length:
            raise VectorLengthError(len(fill), output._length)
        output._fill = fill
        return output

    # json files only:
    def to_file(self, filename: str) -> None:
        with open(filename, 'w') as f:
            f.write(json.dumps(self.to_JSON(), indent = 2))

    @classmethod
    def from_file(cls, filename: str) -> "Lfsr":
        with open(filename, 'r') as f:
            return cls.from_JSON(json.loads(f.read()))
