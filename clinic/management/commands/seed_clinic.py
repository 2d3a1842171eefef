"""
Management command to seed the clinic with demo content.

Safe to run repeatedly: singletons go through ``ensure_exists`` and
services/medicines are only inserted when no row with the same title or
name exists yet.
"""
from decimal import Decimal

from django.core.management.base import BaseCommand

from clinic.services.singletons import profile_record, settings_record
from clinic.store import TableStore

SERVICES = [
    ("Pulse Diagnosis", "Traditional Naadi examination to understand the root cause.", "Activity"),
    ("Chronic Disease Care", "Long-term Siddha treatment plans for chronic conditions.", "HeartPulse"),
    ("Skin Disorders", "Herbal care for eczema, psoriasis and other skin problems.", "Sparkles"),
    ("Joint & Arthritis Care", "Relief for joint pain, arthritis and stiffness.", "Bone"),
    ("Digestive Health", "Treatment for acidity, constipation and digestive issues.", "Apple"),
    ("Diabetes Management", "Herbal support alongside diet and lifestyle guidance.", "Droplet"),
    ("Women's Health", "Care for menstrual and hormonal health.", "Flower2"),
    ("Respiratory Care", "Support for asthma, sinusitis and recurring colds.", "Wind"),
    ("Hair & Scalp Care", "Treatment for hair fall, dandruff and scalp problems.", "Scissors"),
    ("Stress & Sleep", "Natural remedies for stress, anxiety and insomnia.", "Moon"),
    ("Varmam Therapy", "Traditional pressure-point therapy.", "Hand"),
    ("Online Consultation", "Video or phone consultation from home.", "Video"),
]

MEDICINES = [
    {"name": "Pain Relief Tonic", "category": "Tonic", "price": Decimal("250.00"),
     "used_for": "Joint pain, Back pain", "dosage_notes": "10 ml twice daily after food."},
    {"name": "Digestive Churnam", "category": "Powder", "price": Decimal("180.00"),
     "used_for": "Acidity, Indigestion", "dosage_notes": "1 teaspoon with warm water at night."},
    {"name": "Herbal Hair Oil", "category": "Oil", "price": Decimal("320.00"), "stock_status": "Limited",
     "used_for": "Hair fall, Dandruff", "dosage_notes": "Apply to scalp twice a week."},
    {"name": "Cough Syrup", "category": "Syrup", "price": Decimal("150.00"), "is_active": False,
     "used_for": "Cough, Cold", "dosage_notes": "5 ml three times daily."},
]


class Command(BaseCommand):
    help = 'Seed the clinic with a doctor profile, settings, services and sample medicines'

    def handle(self, *args, **options):
        store = TableStore.service()

        profile_record(store).ensure_exists()
        settings_record(store).ensure_exists()
        self.stdout.write('singletons ensured')

        created = 0
        existing = {row['title'] for row in store.select('services', order=('sort_order',))}
        for index, (title, description, icon) in enumerate(SERVICES):
            if title in existing:
                continue
            store.insert('services', {'title': title, 'description': description, 'icon': icon,
                                      'sort_order': index, 'is_enabled': True})
            created += 1
        self.stdout.write(f'services: {created} created')

        created = 0
        existing = {row['name'] for row in store.select('medicines')}
        for values in MEDICINES:
            if values['name'] in existing:
                continue
            store.insert('medicines', dict(values))
            created += 1
        self.stdout.write(f'medicines: {created} created')

        self.stdout.write(self.style.SUCCESS('Clinic data seeded.'))
