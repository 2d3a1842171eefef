"""Badge variants for status values; anything unknown falls back to the default look."""

DEFAULT = 'default'

BADGES = {
    'consultation': {
        'New': 'default',
        'Contacted': 'secondary',
        'Completed': 'outline',
        'Cancelled': 'destructive',
    },
    'inquiry': {
        'New': 'default',
        'Replied': 'secondary',
        'Closed': 'outline',
    },
    'stock': {
        'Available': 'secondary',
        'Limited': 'outline',
        'Out of Stock': 'destructive',
    },
}


def status_badge(value, kind: str = 'consultation') -> str:
    if not isinstance(value, str):
        return DEFAULT
    return BADGES.get(kind, {}).get(value, DEFAULT)
