"""Domain services: fees, slots, vehicles, sessions, payments and reports."""
