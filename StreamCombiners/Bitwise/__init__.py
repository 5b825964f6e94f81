from StreamCombiners.Bitwise.BitVector import BitVector
