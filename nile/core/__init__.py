"""Pravidla hry Nile bez UI: doska, validacia tahu, hraci a priebeh hry."""
