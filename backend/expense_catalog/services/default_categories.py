# Default expense category catalogs

from ..enums import ExpenseCategoryType as T

# Seeded into a tenant on onboarding (and by the tenant backfill)
DEFAULT_EXPENSE_CATEGORIES = [
    {"code": "DEP_TRANSPORT", "nom": "Transport & Déplacements", "type_global": T.EXPLOITATION, "icone": "🚗"},
    {"code": "DEP_RESTAURATION", "nom": "Repas & Restauration", "type_global": T.EXPLOITATION, "icone": "🍽️"},
    {"code": "DEP_HEBERGEMENT", "nom": "Hébergement & Séjours", "type_global": T.EXPLOITATION, "icone": "🏨"},
    {"code": "DEP_FOURNITURE", "nom": "Fournitures de bureau", "type_global": T.EXPLOITATION, "icone": "🖇️"},
    {"code": "DEP_MATERIEL_CONSOM", "nom": "Matériel consommé", "type_global": T.CONSOMMABLE, "icone": "🧰"},
    {"code": "DEP_ENTRETIEN", "nom": "Entretien & Nettoyage", "type_global": T.EXPLOITATION, "icone": "🧼"},
    {"code": "DEP_COMMUNICATION", "nom": "Téléphone & Internet", "type_global": T.EXPLOITATION, "icone": "📞"},
    {"code": "DEP_ENERGIE", "nom": "Électricité & Eau", "type_global": T.EXPLOITATION, "icone": "💡"},
    {"code": "DEP_LOCATION", "nom": "Loyer & Charges locatives", "type_global": T.EXPLOITATION, "icone": "🏢"},
    {"code": "DEP_BANQUE", "nom": "Frais bancaires", "type_global": T.FINANCIER, "icone": "💳"},
    {"code": "DEP_INFORMATIQUE", "nom": "Informatique & Logiciels", "type_global": T.EXPLOITATION, "icone": "💻"},
    {"code": "DEP_ASSURANCE", "nom": "Assurances", "type_global": T.EXPLOITATION, "icone": "🛡️"},
    {"code": "DEP_CONSULTANT", "nom": "Honoraires & Prestations externes", "type_global": T.EXPLOITATION, "icone": "🧾"},
    {"code": "DEP_INVEST", "nom": "Matériel durable / Investissement", "type_global": T.INVESTISSEMENT, "icone": "🏗️"},
    {"code": "DEP_EXCEP", "nom": "Dépenses exceptionnelles", "type_global": T.EXCEPTIONNEL, "icone": "⚠️"},
    {"code": "DEP_DIVERS", "nom": "Autres dépenses", "type_global": T.EXPLOITATION, "icone": "📁"},
]

# Shared catalog loaded by scripts/seed_global_categories.py
GLOBAL_DEFAULT_CATEGORIES = [
    # Exploitation
    {"code": "TRANSPORT", "nom": "Transport", "icone": "🚗", "type_global": T.EXPLOITATION, "description": "Frais de transport et déplacement"},
    {"code": "TELECOM", "nom": "Télécommunications", "icone": "📞", "type_global": T.EXPLOITATION, "description": "Téléphone, internet, communications"},
    {"code": "ENERGIE", "nom": "Énergie", "icone": "⚡", "type_global": T.EXPLOITATION, "description": "Électricité, gaz, carburant"},
    {"code": "LOCAL", "nom": "Local", "icone": "🏢", "type_global": T.EXPLOITATION, "description": "Loyer, charges, maintenance"},
    {"code": "ASSURANCE", "nom": "Assurance", "icone": "🛡️", "type_global": T.EXPLOITATION, "description": "Assurances professionnelles"},
    {"code": "BANQUE", "nom": "Frais bancaires", "icone": "🏦", "type_global": T.EXPLOITATION, "description": "Frais de tenue de compte, virements"},
    {"code": "COMPTA", "nom": "Comptabilité", "icone": "📊", "type_global": T.EXPLOITATION, "description": "Expert-comptable, logiciels comptables"},
    {"code": "JURIDIQUE", "nom": "Juridique", "icone": "⚖️", "type_global": T.EXPLOITATION, "description": "Avocat, conseil juridique"},
    {"code": "MARKETING", "nom": "Marketing", "icone": "📢", "type_global": T.EXPLOITATION, "description": "Publicité, communication, marketing"},
    {"code": "FORMATION", "nom": "Formation", "icone": "🎓", "type_global": T.EXPLOITATION, "description": "Formation du personnel"},
    # Consommables
    {"code": "FOURNITURES", "nom": "Fournitures de bureau", "icone": "📝", "type_global": T.CONSOMMABLE, "description": "Papeterie, fournitures de bureau"},
    {"code": "MAINTENANCE", "nom": "Maintenance", "icone": "🔧", "type_global": T.CONSOMMABLE, "description": "Maintenance et réparation"},
    {"code": "NETTOYAGE", "nom": "Nettoyage", "icone": "🧽", "type_global": T.CONSOMMABLE, "description": "Produits de nettoyage"},
    {"code": "SECURITE", "nom": "Sécurité", "icone": "🔒", "type_global": T.CONSOMMABLE, "description": "Équipements de sécurité"},
    # Investissement
    {"code": "MATERIEL", "nom": "Matériel informatique", "icone": "💻", "type_global": T.INVESTISSEMENT, "description": "Ordinateurs, serveurs, équipements IT"},
    {"code": "MOBILIER", "nom": "Mobilier", "icone": "🪑", "type_global": T.INVESTISSEMENT, "description": "Mobilier de bureau"},
    {"code": "VEHICULE", "nom": "Véhicule", "icone": "🚙", "type_global": T.INVESTISSEMENT, "description": "Achat de véhicule professionnel"},
    {"code": "EQUIPEMENT", "nom": "Équipement", "icone": "⚙️", "type_global": T.INVESTISSEMENT, "description": "Équipements de production"},
    # Financier
    {"code": "INTERET", "nom": "Intérêts", "icone": "💰", "type_global": T.FINANCIER, "description": "Intérêts d'emprunts"},
    {"code": "FRAIS_FIN", "nom": "Frais financiers", "icone": "💳", "type_global": T.FINANCIER, "description": "Frais bancaires, commissions"},
    {"code": "DIVIDENDE", "nom": "Dividendes", "icone": "📈", "type_global": T.FINANCIER, "description": "Dividendes versés"},
    # Exceptionnel
    {"code": "EXCEPTIONNEL", "nom": "Exceptionnel", "icone": "⚠️", "type_global": T.EXCEPTIONNEL, "description": "Dépenses exceptionnelles"},
    {"code": "PERTE", "nom": "Perte", "icone": "📉", "type_global": T.EXCEPTIONNEL, "description": "Pertes exceptionnelles"},
    {"code": "PROVISION", "nom": "Provision", "icone": "📋", "type_global": T.EXCEPTIONNEL, "description": "Provisions pour risques"},
]
