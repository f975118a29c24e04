from __future__ import annotations

# Carriers head home once adamantium + mana reaches this.
CARRY_THRESHOLD = 40

# Half-width of the square scanned for collectable wells (3x3 around self).
COLLECTION_REACH = 1

DEFAULT_SEED = 6147
