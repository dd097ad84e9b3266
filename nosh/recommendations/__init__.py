"""
Restaurant catalog and ranking.

Responsibilities:
- Hold the read-only seed catalog (as records and as a DataFrame).
- Filter the catalog by cuisine, price tier and spice preference.
- Order survivors by speed, price or rating, with distance as tie-break.
- Return the top results ready for chat rendering or API serialisation.
"""
