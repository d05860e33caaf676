# Seed data - clients and the inflammation reference tables read by the IDN pipeline
import logging

from models import Client, InflammationGrouping, clients, inflammation_groupings, inflammations, processed_client_data

logger = logging.getLogger(__name__)

INFLAMMATION_NAMES = [
    "Adrenal stimulant",
    "Ankylosing Spondylitis + (Part 1)",
    "Arachnoiditis ++",
    "Bells Palsy + (Part 2)",
    "Brain Beta wave stimulation",
    "CTLA4 (CTLA4) mRNA, complete cds ( Part 2 ) +++",
    "Depression II",
    "Diverticulitis ++",
    "Enterovirus Part 4",
    "Fecal Incontinence ++",
    "Felty Syndrome ++",
    "Fibromyalgia Part 3",
    "Gastroparesis ++",
    "Hypothyroidism +",
    "Mandibulofacial Dysostosis ++",
    "Menieres 1 (Low)",
    "Prevention of alopecia (hair loss) by the super anti-cell death protein, FNK +++",
    "Proctocolitis ++",
    "Psoriasis ankylosing spondylitis",
    "Rectal Diseases ++",
    "Rectocolitis, Hemorrhagic ++",
    "Rectocolitis, Ulcerative ++",
    "Rectosigmoiditis ++",
    "Regeneration and Healing",
    "Rheumatoid Arthritis ++",
]

def seed_data():
    """Initialize clients and reference tables; processed IDN data starts empty"""
    # Clear existing data
    clients.clear()
    processed_client_data.clear()
    inflammations.clear()
    inflammation_groupings.clear()

    clients["c1"] = Client(clientId="c1", clientNumber=1001, fullName="John Doe", email="john.doe@example.com")
    clients["c2"] = Client(clientId="c2", clientNumber=1002, fullName="Jane Smith", email="jane.smith@example.com")
    clients["c3"] = Client(clientId="c3", clientNumber=1003, fullName="Alex Rivera")

    inflammations.extend(INFLAMMATION_NAMES)

    # Catalog order decides which grouping a scan's aggregate is credited to
    inflammation_groupings.extend([
        InflammationGrouping(
            groupName="Lower Digestive Tract",
            inflammations=["Proctocolitis ++", "Rectal Diseases ++", "Rectosigmoiditis ++"],
        ),
        InflammationGrouping(
            groupName="Colitis",
            inflammations=["Rectocolitis, Hemorrhagic ++", "Rectocolitis, Ulcerative ++"],
        ),
        InflammationGrouping(
            groupName="Autoimmune Joint",
            inflammations=["Rheumatoid Arthritis ++", "Felty Syndrome ++"],
        ),
        InflammationGrouping(
            groupName="Spinal Inflammation",
            inflammations=["Ankylosing Spondylitis + (Part 1)", "Psoriasis ankylosing spondylitis", "Arachnoiditis ++"],
        ),
        InflammationGrouping(
            groupName="Gut Motility",
            inflammations=["Gastroparesis ++", "Diverticulitis ++", "Fecal Incontinence ++"],
        ),
    ])

    logger.info(
        "Seed data initialized: %d clients, %d inflammations, %d groupings",
        len(clients),
        len(inflammations),
        len(inflammation_groupings),
    )

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_data()
