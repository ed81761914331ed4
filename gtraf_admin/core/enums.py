from enum import Enum


class VehicleClass(str, Enum):
    CITADINE = "Citadine"
    BERLINE = "Berline"
    SUV_4X4 = "SUV/4x4"
    UTILITAIRE = "Utilitaire"
    MINIBUS = "Minibus"

    def __str__(self):
        return self.value


class InsuranceOption(str, Enum):
    TIERS = "Tiers"
    TOUS_RISQUES = "Tous risques"
    VOL_INCENDIE = "Vol/Incendie"

    def __str__(self):
        return self.value


class EquipmentOption(str, Enum):
    GPS = "GPS"
    SIEGE_BEBE = "Siège bébé"
    WIFI = "Wi-Fi"

    def __str__(self):
        return self.value


class ReservationExtra(str, Enum):
    DRIVER = "Avec chauffeur"
    UNLIMITED_MILEAGE = "Kilométrage illimité"

    def __str__(self):
        return self.value


class PaymentMethod(str, Enum):
    CASH = "Espèces"
    CARD = "Carte"
    TRANSFER = "Virement"

    def __str__(self):
        return self.value


class ProjectType(str, Enum):
    NEW_BUILD = "Construction neuve"
    RENOVATION = "Rénovation complète"
    EXTENSION = "Extension/Agrandissement"
    COMMERCIAL_FITTING = "Aménagement commercial"
    OTHER = "Autre projet"

    def __str__(self):
        return self.value


class Budget(str, Enum):
    UNDER_100K = "Moins de 100k€"
    FROM_100K_TO_500K = "100k€ - 500k€"
    FROM_500K_TO_1M = "500k€ - 1M€"
    FROM_1M_TO_5M = "1M€ - 5M€"
    OVER_5M = "Plus de 5M€"

    def __str__(self):
        return self.value


class PortfolioCategory(str, Enum):
    RESIDENTIAL = "Résidentiel"
    COMMERCIAL = "Commercial"
    INSTITUTIONAL = "Institutionnel"
    INDUSTRIAL = "Industriel"
    LANDSCAPE = "Paysager"

    def __str__(self):
        return self.value


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def __str__(self):
        return self.value


class AuditAction(str, Enum):
    CREATE_DEVIS = "create_devis"
    UPDATE_DEVIS = "update_devis"
    DELETE_DEVIS = "delete_devis"
    CREATE_RESERVATION = "create_reservation"
    UPDATE_RESERVATION = "update_reservation"
    DELETE_RESERVATION = "delete_reservation"
    CREATE_PORTFOLIO = "create_portfolio"
    UPDATE_PORTFOLIO = "update_portfolio"
    DELETE_PORTFOLIO = "delete_portfolio"
    IMPORT_DATA = "import_data"
    RESET_DATA = "reset_data"
    LOGIN = "login"

    def __str__(self):
        return self.value
