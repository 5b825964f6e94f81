from StreamCombiners.Registers.Lfsr import Lfsr
