"""Vector fragments embedded in the token image."""

BAG_WIDTH = 200
BAG_HEIGHT = 363

# Fertilizer bag, drawn in a 200x363 box at the origin.
FERTILIZER_BAG = """
<path d="M20 40 L180 40 L196 340 Q196 363 172 363 L28 363 Q4 363 4 340 Z" fill="#8E8E8E" stroke="#3D3D3D" stroke-width="3"/>
<path d="M30 0 L170 0 L180 40 L20 40 Z" fill="#B3B3B3" stroke="#3D3D3D" stroke-width="3"/>
<path d="M30 0 L40 14 L50 0 L60 14 L70 0 L80 14 L90 0 L100 14 L110 0 L120 14 L130 0 L140 14 L150 0 L160 14 L170 0" fill="none" stroke="#3D3D3D" stroke-width="2"/>
<rect x="36" y="120" width="128" height="150" rx="10" fill="#FFFFFF" stroke="#3D3D3D" stroke-width="2"/>
<path d="M100 246 C100 214 100 190 100 168" fill="none" stroke="#46B955" stroke-width="6" stroke-linecap="round"/>
<path d="M100 196 C78 196 66 180 64 160 C86 160 100 174 100 196 Z" fill="#46B955"/>
<path d="M100 182 C122 182 134 166 136 146 C114 146 100 160 100 182 Z" fill="#46B955"/>
<ellipse cx="100" cy="250" rx="40" ry="8" fill="#7A5230"/>
"""
