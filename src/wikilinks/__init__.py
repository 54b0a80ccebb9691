"""Wiki link normalization: title encoding, href resolution and link classification."""
