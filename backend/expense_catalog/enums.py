from enum import Enum

class ExpenseCategoryType(str, Enum):
    EXPLOITATION = "exploitation"
    CONSOMMABLE = "consommable"
    INVESTISSEMENT = "investissement"
    FINANCIER = "financier"
    EXCEPTIONNEL = "exceptionnel"

class CategoryScope(str, Enum):
    TENANT = "tenant"
    GLOBAL = "globale"

class CategorySource(str, Enum):
    TENANT = "tenant"
    GLOBAL = "global"

class CategorySortField(str, Enum):
    NOM = "nom"
    CODE = "code"
    TYPE_GLOBAL = "type_global"
    CREATED_AT = "created_at"

class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
