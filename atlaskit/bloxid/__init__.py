"""Typed, versioned resource identifiers with random, extrinsic and hashid schemes."""