"""
Adapter implementations for the itinerary aggregator.

Adapters are concrete implementations of the port interfaces.
They handle the specifics of upstream schemas, storage and transport.
"""
