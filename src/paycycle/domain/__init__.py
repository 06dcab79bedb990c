"""Domain layer for paycycle application.

Services live in their own modules (``paycycle.domain.settlement`` and so on)
and are imported from there; the database layer imports entities from this
package, so nothing here may import a service.
"""
