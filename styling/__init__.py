"""Farbberechnung: Kontrast, Aufhellen/Abdunkeln, Kartenstile."""
