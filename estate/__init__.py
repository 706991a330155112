"""Signature-authorized lazy-minting marketplace for sale and rental offers."""
