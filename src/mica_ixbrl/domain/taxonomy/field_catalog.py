# src/mica_ixbrl/domain/taxonomy/field_catalog.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Field catalog for the "other crypto-asset" (OTHR) white-paper table.

Purpose:
    Declare every white-paper field: its number, label, target element, data
    type, period type and rendering flags, grouped into the canonical section
    order (Summary, Parts A-J, Annex sustainability indicators).

Layer:
    domain/taxonomy

Notes:
    - Pure data loaded once at import time. Correctness of the catalog is an
      input invariant; tests only check shape and uniqueness.
    - Enumeration fields are hidden (machine value in ``ix:hidden``) and
      date fields use the instant context. Everything else is reported
      against the duration context unless stated otherwise.
    - Dimensional fields are reported per management-body member or person
      involved and are rendered as repeating blocks, not section rows.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from mica_ixbrl.domain.entities.taxonomy import FieldDefinition, SectionDefinition
from mica_ixbrl.domain.enums.mica import PeriodType, XBRLDataType

_STR = XBRLDataType.STRING
_BOOL = XBRLDataType.BOOLEAN
_DATE = XBRLDataType.DATE
_MON = XBRLDataType.MONETARY
_DEC = XBRLDataType.DECIMAL
_INT = XBRLDataType.INTEGER
_PCT = XBRLDataType.PERCENT
_TB = XBRLDataType.TEXT_BLOCK
_ENUM = XBRLDataType.ENUMERATION

_INSTANT = PeriodType.INSTANT

SECTIONS: Final[tuple[SectionDefinition, ...]] = (
    SectionDefinition("summary", "Summary", "section-summary"),
    SectionDefinition("A", "Part A: Information about the Offeror", "section-a"),
    SectionDefinition("B", "Part B: Information about the Issuer", "section-b"),
    SectionDefinition(
        "C", "Part C: Information about the Operator of the Trading Platform", "section-c"
    ),
    SectionDefinition("D", "Part D: Information about the Crypto-Asset Project", "section-d"),
    SectionDefinition(
        "E",
        "Part E: Information about the Offer to the Public or Admission to Trading",
        "section-e",
    ),
    SectionDefinition("F", "Part F: Information about the Crypto-Asset", "section-f"),
    SectionDefinition("G", "Part G: Rights and Obligations", "section-g"),
    SectionDefinition("H", "Part H: Information on the Underlying Technology", "section-h"),
    SectionDefinition("I", "Part I: Risk Disclosure and Compliance Statements", "section-i"),
    SectionDefinition("J", "Part J: Information on Sustainability", "section-j"),
    SectionDefinition("S", "Annex III: Sustainability Indicators", "section-s"),
)

SECTION_ORDER: Final[tuple[str, ...]] = tuple(s.key for s in SECTIONS)


def _section_of(number: str) -> str:
    """Derive the section key from a field number (``"A.3a"`` -> ``"A"``)."""
    head = number.split(".", 1)[0]
    return head if "." in number else "summary"


def _field(
    number: str,
    label: str,
    element: str,
    data_type: XBRLDataType,
    *,
    period: PeriodType | None = None,
    dimensional: bool = False,
) -> FieldDefinition:
    """Build a field definition, deriving flags from its data type."""
    if period is None:
        period = _INSTANT if data_type is _DATE else PeriodType.DURATION
    return FieldDefinition(
        number=number,
        label=label,
        element=element,
        data_type=data_type,
        section=_section_of(number),
        period_type=period,
        is_text_block=data_type is _TB,
        is_hidden=data_type is _ENUM,
        is_dimensional=dimensional,
    )


# --------------------------------------------------------------------------- #
# Summary                                                                     #
# --------------------------------------------------------------------------- #

_SUMMARY = (
    _field("01", "Date of notification", "mica:DateOfNotification", _DATE),
    _field(
        "02",
        "Statement in accordance with Article 6(3) of Regulation (EU) 2023/1114",
        "mica:StatementInAccordanceWithArticle63Explanatory",
        _TB,
    ),
    _field(
        "03",
        "Compliance statement in accordance with Article 6(6)",
        "mica:ComplianceStatementInAccordanceWithArticle66Explanatory",
        _TB,
    ),
    _field(
        "04",
        "Statement in accordance with Article 6(5), points (a), (b), (c)",
        "mica:StatementInAccordanceWithArticle65Explanatory",
        _TB,
    ),
    _field(
        "05",
        "Statement in accordance with Article 6(5), point (d)",
        "mica:StatementInAccordanceWithArticle65PointDExplanatory",
        _TB,
    ),
    _field(
        "06",
        "Statement in accordance with Article 6(5), points (e) and (f)",
        "mica:StatementInAccordanceWithArticle65PointsEAndFExplanatory",
        _TB,
    ),
    _field("07", "Warning in accordance with Article 6(7)", "mica:WarningExplanatory", _TB),
    _field(
        "08",
        "Characteristics of the crypto-asset",
        "mica:CharacteristicsOfCryptoAssetExplanatory",
        _TB,
    ),
    _field(
        "09",
        "Information about the quality and quantity of goods or services",
        "mica:InformationAboutQualityAndQuantityOfGoodsOrServicesExplanatory",
        _TB,
    ),
    _field(
        "10",
        "Key information about the offer to the public or admission to trading",
        "mica:KeyInformationAboutOfferToPublicOrAdmissionToTradingExplanatory",
        _TB,
    ),
)

# --------------------------------------------------------------------------- #
# Part A: offeror                                                             #
# --------------------------------------------------------------------------- #

_PART_A = (
    _field("A.1", "Name", "mica:NameOfOtherTokenOfferor", _STR),
    _field("A.2", "Legal form", "mica:OfferorsLegalForm", _STR),
    _field("A.3", "Registered address", "mica:OfferorsRegisteredAddress", _STR),
    _field("A.3a", "Registered country", "mica:OfferorsRegisteredCountry", _ENUM),
    _field("A.4", "Head office", "mica:OfferorsHeadOfficeAddress", _STR),
    _field("A.4a", "Head office country", "mica:OfferorsHeadOfficeCountry", _ENUM),
    _field("A.5", "Registration date", "mica:OfferorsRegistrationDate", _DATE),
    _field("A.6", "Legal entity identifier", "mica:OfferorsLegalEntityIdentifier", _STR),
    _field("A.7", "Another identifier required pursuant to applicable national law",
           "mica:OfferorsOtherIdentifier", _STR),
    _field("A.8", "Contact telephone number", "mica:OfferorsContactTelephoneNumber", _STR),
    _field("A.9", "E-mail address", "mica:OfferorsEmailAddress", _STR),
    _field("A.10", "Response time (Days)", "mica:OfferorsResponseTimeDays", _INT),
    _field("A.11", "Parent company", "mica:OfferorsParentCompanyName", _STR),
    _field(
        "A.12",
        "Members of the management body",
        "mica:IdentityOfOfferorsManagementBodyMemberForOtherToken",
        _STR,
        dimensional=True,
    ),
    _field(
        "A.12a",
        "Business address of the management body member",
        "mica:BusinessAddressOfOfferorsManagementBodyMemberForOtherToken",
        _STR,
        dimensional=True,
    ),
    _field(
        "A.12b",
        "Function of the management body member",
        "mica:FunctionOfOfferorsManagementBodyMemberForOtherToken",
        _STR,
        dimensional=True,
    ),
    _field("A.13", "Business activity", "mica:OfferorsBusinessActivityExplanatory", _TB),
    _field(
        "A.14",
        "Parent company business activity",
        "mica:OfferorsParentCompanyBusinessActivityExplanatory",
        _TB,
    ),
    _field("A.15", "Newly established", "mica:OfferorNewlyEstablishedIndicator", _BOOL),
    _field(
        "A.16",
        "Financial condition for the past three years",
        "mica:OfferorsFinancialConditionForPastThreeYearsExplanatory",
        _TB,
    ),
    _field(
        "A.17",
        "Financial condition since registration",
        "mica:OfferorsFinancialConditionSinceRegistrationExplanatory",
        _TB,
    ),
    _field("A.18", "Website", "mica:OtherTokenIssuersWebsite", _STR),
    _field(
        "A.20",
        "Competent authority for credit institutions",
        "mica:CompetentAuthorityForCreditInstitutions",
        _ENUM,
    ),
)

# --------------------------------------------------------------------------- #
# Part B: issuer                                                              #
# --------------------------------------------------------------------------- #

_PART_B = (
    _field(
        "B.1",
        "Issuer different from offeror or person seeking admission to trading",
        "mica:IssuerDifferentFromOfferrorOrPersonSeekingAdmissionToTrading",
        _BOOL,
    ),
    _field("B.2", "Name", "mica:NameOfOtherTokenIssuer", _STR),
    _field("B.3", "Legal form", "mica:IssuersLegalForm", _STR),
    _field("B.4", "Registered address", "mica:IssuersRegisteredAddress", _STR),
    _field("B.4a", "Registered country", "mica:IssuersRegisteredCountry", _ENUM),
    _field("B.5", "Head office", "mica:IssuersHeadOfficeAddress", _STR),
    _field("B.5a", "Head office country", "mica:IssuersHeadOfficeCountry", _ENUM),
    _field("B.6", "Registration date", "mica:IssuersRegistrationDate", _DATE),
    _field("B.7", "Legal entity identifier", "mica:IssuersLegalEntityIdentifier", _STR),
    _field("B.8", "Another identifier required pursuant to applicable national law",
           "mica:IssuersOtherIdentifier", _STR),
    _field("B.9", "Parent company", "mica:IssuersParentCompanyName", _STR),
    _field(
        "B.10",
        "Members of the management body",
        "mica:IdentityOfIssuersManagementBodyMemberForOtherToken",
        _STR,
        dimensional=True,
    ),
    _field(
        "B.10a",
        "Business address of the management body member",
        "mica:BusinessAddressOfIssuersManagementBodyMemberForOtherToken",
        _STR,
        dimensional=True,
    ),
    _field(
        "B.10b",
        "Function of the management body member",
        "mica:FunctionOfIssuersManagementBodyMemberForOtherToken",
        _STR,
        dimensional=True,
    ),
    _field("B.11", "Business activity", "mica:IssuersBusinessActivityExplanatory", _TB),
    _field(
        "B.12",
        "Parent company business activity",
        "mica:IssuersParentCompanyBusinessActivityExplanatory",
        _TB,
    ),
)

# --------------------------------------------------------------------------- #
# Part C: operator of the trading platform                                   #
# --------------------------------------------------------------------------- #

_PART_C = (
    _field("C.1", "Name", "mica:NameOfOtherTokenOperator", _STR),
    _field("C.2", "Legal form", "mica:OperatorsLegalForm", _STR),
    _field("C.3", "Registered address", "mica:OperatorsRegisteredAddress", _STR),
    _field("C.3a", "Registered country", "mica:OperatorsRegisteredCountry", _ENUM),
    _field("C.4", "Head office", "mica:OperatorsHeadOfficeAddress", _STR),
    _field("C.4a", "Head office country", "mica:OperatorsHeadOfficeCountry", _ENUM),
    _field("C.5", "Registration date", "mica:OperatorsRegistrationDate", _DATE),
    _field("C.6", "Legal entity identifier", "mica:OperatorsLegalEntityIdentifier", _STR),
    _field("C.7", "Another identifier required pursuant to applicable national law",
           "mica:OperatorsOtherIdentifier", _STR),
    _field("C.8", "Parent company", "mica:OperatorsParentCompanyName", _STR),
    _field(
        "C.9",
        "Reason for crypto-asset white paper preparation",
        "mica:ReasonForCryptoAssetWhitePaperPreparationExplanatory",
        _TB,
    ),
    _field("C.10", "Number of units", "mica:NumberOfUnits", _INT),
    _field(
        "C.11",
        "Members of the management body",
        "mica:IdentityOfOperatorsManagementBodyMemberForOtherToken",
        _STR,
        dimensional=True,
    ),
    _field(
        "C.11a",
        "Business address of the management body member",
        "mica:BusinessAddressOfOperatorsManagementBodyMemberForOtherToken",
        _STR,
        dimensional=True,
    ),
    _field(
        "C.11b",
        "Function of the management body member",
        "mica:FunctionOfOperatorsManagementBodyMemberForOtherToken",
        _STR,
        dimensional=True,
    ),
    _field("C.12", "Operator business activity", "mica:OperatorsBusinessActivityExplanatory",
           _TB),
    _field(
        "C.13",
        "Parent company business activity",
        "mica:OperatorsParentCompanyBusinessActivityExplanatory",
        _TB,
    ),
    _field(
        "C.14",
        "Other persons drawing up the crypto-asset white paper",
        "mica:OtherPersonsDrawingUpCryptoAssetWhitePaperExplanatory",
        _TB,
    ),
    _field(
        "C.15",
        "Reason for other persons drawing up the white paper",
        "mica:ReasonForOtherPersonsDrawingUpWhitePaperExplanatory",
        _TB,
    ),
    _field(
        "C.16",
        "Persons involved in the implementation of the crypto-asset project",
        "mica:NameOfPersonInvolvedInImplementationOfOtherToken",
        _STR,
        dimensional=True,
    ),
    _field(
        "C.16a",
        "Business address of the person involved",
        "mica:BusinessAddressOfPersonInvolvedInImplementationOfOtherToken",
        _STR,
        dimensional=True,
    ),
    _field(
        "C.16b",
        "Type of person involved",
        "mica:TypeOfPersonInvolvedInImplementationOfOtherToken",
        _ENUM,
        dimensional=True,
    ),
)

# --------------------------------------------------------------------------- #
# Part D: crypto-asset project                                                #
# --------------------------------------------------------------------------- #

_PART_D = (
    _field("D.1", "Crypto-asset project name", "mica:NameOfOtherTokenProject", _STR),
    _field("D.2", "Crypto-asset name", "mica:NameOfOtherToken", _STR),
    _field("D.3", "Abbreviation", "mica:OtherTokenProjectAbbreviation", _STR),
    _field(
        "D.4",
        "Crypto-asset project description",
        "mica:DescriptionOfOtherTokenProjectExplanatory",
        _TB,
    ),
    _field(
        "D.5",
        "Details of all persons involved in the implementation of the project",
        "mica:DetailsOfPersonsInvolvedInImplementationOfProjectExplanatory",
        _TB,
    ),
    _field("D.6", "Utility token classification", "mica:UtilityTokenClassificationIndicator",
           _BOOL),
    _field(
        "D.7",
        "Key features of goods or services for utility token projects",
        "mica:KeyFeaturesOfGoodsOrServicesForUtilityTokenProjectsExplanatory",
        _TB,
    ),
    _field("D.8", "Plans for the token", "mica:PlansForTokenExplanatory", _TB),
    _field("D.9", "Resource allocation", "mica:ResourceAllocationExplanatory", _TB),
    _field("D.10", "Planned use of collected funds or crypto-assets",
           "mica:PlannedUseOfCollectedFundsOrCryptoAssetsExplanatory", _TB),
)

# --------------------------------------------------------------------------- #
# Part E: offer to the public or admission to trading                         #
# --------------------------------------------------------------------------- #

_PART_E = (
    _field("E.1", "Public offering or admission to trading",
           "mica:PublicOfferingOrAdmissionToTrading", _ENUM),
    _field("E.2", "Reasons for public offer or admission to trading",
           "mica:ReasonsForPublicOfferOrAdmissionToTradingExplanatory", _TB),
    _field("E.3", "Fundraising target", "mica:FundraisingTargetExpressedInCurrency", _MON),
    _field("E.4", "Minimum subscription goals",
           "mica:MinimumSubscriptionGoalsExpressedInCurrency", _MON),
    _field("E.5", "Maximum subscription goals",
           "mica:MaximumSubscriptionGoalsExpressedInCurrency", _MON),
    _field("E.6", "Oversubscription acceptance", "mica:OversubscriptionAcceptanceIndicator",
           _BOOL),
    _field("E.7", "Oversubscription allocation", "mica:OversubscriptionAllocationExplanatory",
           _TB),
    _field("E.8", "Issue price", "mica:IssuePrice", _MON),
    _field("E.9", "Official currency or any other crypto-assets determining the issue price",
           "mica:OfficialCurrencyDeterminingIssuePrice", _ENUM),
    _field("E.10", "Subscription fee", "mica:SubscriptionFeeExpressedInCurrency", _MON),
    _field("E.11", "Offer price determination method",
           "mica:OfferPriceDeterminationMethodExplanatory", _TB),
    _field("E.12", "Total number of offered or traded crypto-assets",
           "mica:TotalNumberOfOfferedOrTradedOtherTokens", _INT, period=_INSTANT),
    _field("E.13", "Targeted holders", "mica:TargetedHoldersForOtherToken", _ENUM),
    _field("E.14", "Holder restrictions", "mica:HolderRestrictionsExplanatory", _TB),
    _field("E.15", "Reimbursement notice", "mica:ReimbursementNoticeExplanatory", _TB),
    _field("E.16", "Refund mechanism", "mica:RefundMechanismExplanatory", _TB),
    _field("E.17", "Refund timeline", "mica:RefundTimelineExplanatory", _TB),
    _field("E.18", "Offer phases", "mica:OfferPhasesExplanatory", _TB),
    _field("E.19", "Early purchase discount", "mica:EarlyPurchaseDiscountExplanatory", _TB),
    _field("E.20", "Time-limited offer", "mica:TimeLimitedOfferIndicator", _BOOL),
    _field("E.21", "Subscription period beginning", "mica:SubscriptionPeriodBeginning", _DATE),
    _field("E.22", "Subscription period end", "mica:SubscriptionPeriodEnd", _DATE),
    _field("E.23", "Safeguarding arrangements for offered funds or crypto-assets",
           "mica:SafeguardingArrangementsForOfferedFundsExplanatory", _TB),
    _field("E.24", "Payment methods for crypto-asset purchase",
           "mica:PaymentMethodsForCryptoAssetPurchase", _STR),
    _field("E.25", "Value transfer methods for reimbursement",
           "mica:ValueTransferMethodsForReimbursement", _STR),
    _field("E.26", "Right of withdrawal", "mica:RighOfWithdrawalExplanatory", _TB),
    _field("E.27", "Transfer of purchased crypto-assets",
           "mica:TransferOfPurchasedCryptoAssetsExplanatory", _TB),
    _field("E.28", "Transfer time schedule", "mica:TransferTimeScheduleExplanatory", _TB),
    _field("E.29", "Purchaser's technical requirements",
           "mica:PurchasersTechnicalRequirementsExplanatory", _TB),
    _field("E.30", "Crypto-asset service provider in charge of placement",
           "mica:NameOfCASPInChargeOfPlacement", _STR),
    _field("E.31", "Crypto-asset service provider's legal entity identifier",
           "mica:LEIOfCASPInChargeOfPlacement", _STR),
    _field("E.32", "Placement form", "mica:PlacementFormForOtherToken", _ENUM),
    _field("E.33", "Trading platforms name", "mica:TradingPlatformsName", _STR),
    _field("E.34", "Trading platforms market identifier code", "mica:TradingPlatformsMIC",
           _STR),
    _field("E.35", "Trading platforms access", "mica:TradingPlatformsAccessExplanatory", _TB),
    _field("E.36", "Involved costs", "mica:InvolvedCostsExplanatory", _TB),
    _field("E.37", "Offer expenses", "mica:OfferExpensesExpressedInCurrency", _MON),
    _field("E.38", "Conflicts of interest", "mica:ConflictsOfInterestExplanatory", _TB),
    _field("E.39", "Applicable law", "mica:ApplicableLawForOffer", _STR),
    _field("E.40", "Competent court", "mica:CompetentCourtForOffer", _STR),
)

# --------------------------------------------------------------------------- #
# Part F: crypto-asset                                                        #
# --------------------------------------------------------------------------- #

_PART_F = (
    _field("F.1", "Crypto-asset type", "mica:OtherTokenType", _STR),
    _field("F.2", "Crypto-asset functionality",
           "mica:DescriptionOfOtherTokenCharacteristicsExplanatory", _TB),
    _field("F.3", "Planned application of functionalities",
           "mica:PlannedApplicationOfFunctionalitiesExplanatory", _TB),
    _field("F.4", "Type of crypto-asset white paper", "mica:OtherTokenTypeOfWhitePaper", _ENUM),
    _field("F.5", "Type of submission", "mica:OtherTokenTypeOfSubmission", _ENUM),
    _field("F.6", "Crypto-asset characteristics", "mica:OtherTokenCharacteristicsExplanatory",
           _TB),
    _field("F.7", "Commercial name or trading name", "mica:CommercialNameOrTradingName", _STR),
    _field("F.8", "Website of the issuer", "mica:WebsiteOfIssuer", _STR),
    _field("F.9", "Starting date of offer to the public or admission to trading",
           "mica:StartingDateOfOfferToThePublicOrAdmissionToTrading", _DATE),
    _field("F.10", "Publication date", "mica:PublicationDateOfWhitePaper", _DATE),
    _field("F.11", "Any other services provided by the issuer",
           "mica:AnyOtherServicesProvidedByIssuerExplanatory", _TB),
    _field("F.12", "Language or languages of the crypto-asset white paper",
           "mica:InformationAboutLanguagesUsedInOtherTokenWhitePaper", _STR),
    _field("F.13", "Digital token identifier code", "mica:DigitalTokenIdentifierCode", _STR),
    _field("F.14", "Functionally fungible group digital token identifier",
           "mica:FunctionallyFungibleGroupDigitalTokenIdentifier", _STR),
    _field("F.15", "Voluntary data flag", "mica:VoluntaryDataFlag", _BOOL),
    _field("F.16", "Personal data flag", "mica:PersonalDataFlag", _BOOL),
    _field("F.17", "LEI eligibility", "mica:LEIEligibilityIndicator", _BOOL),
    _field("F.18", "Home member state", "mica:OtherTokenHomeMemberState", _ENUM),
    _field("F.19", "Host member states", "mica:OtherTokenHostMemberStates", _ENUM),
)

# --------------------------------------------------------------------------- #
# Part G: rights and obligations                                              #
# --------------------------------------------------------------------------- #

_PART_G = (
    _field("G.1", "Purchaser rights and obligations",
           "mica:InformationAboutPurchaserRightsAndObligationsExplanatory", _TB),
    _field("G.2", "Exercise of rights and obligations",
           "mica:ExerciseOfRightsAndObligationsExplanatory", _TB),
    _field("G.3", "Conditions for modifications of rights and obligations",
           "mica:ConditionsForModificationsOfRightsAndObligationsExplanatory", _TB),
    _field("G.4", "Future public offers", "mica:FuturePublicOffersExplanatory", _TB),
    _field("G.5", "Issuer retained crypto-assets", "mica:NumberOfOtherTokensRetainedByIssuer",
           _INT, period=_INSTANT),
    _field("G.6", "Utility token classification", "mica:UtilityTokenIndicator", _BOOL),
    _field("G.7", "Key features of goods or services of utility tokens",
           "mica:KeyFeaturesOfGoodsOrServicesOfUtilityTokensExplanatory", _TB),
    _field("G.8", "Utility tokens redemption", "mica:UtilityTokensRedemptionExplanatory", _TB),
    _field("G.9", "Non-trading request", "mica:NonTradingRequestIndicator", _BOOL),
    _field("G.10", "Crypto-assets purchase or sale modalities",
           "mica:CryptoAssetsPurchaseOrSaleModalitiesExplanatory", _TB),
    _field("G.11", "Crypto-assets transfer restrictions",
           "mica:OtherTokensTransferRestrictionsExplanatory", _TB),
    _field("G.12", "Supply adjustment protocols", "mica:SupplyAdjustmentProtocolsIndicator",
           _BOOL),
    _field("G.13", "Supply adjustment mechanisms", "mica:SupplyAdjustmentMechanismsExplanatory",
           _TB),
    _field("G.14", "Token value protection schemes",
           "mica:TokenValueProtectionSchemesIndicator", _BOOL),
    _field("G.15", "Token value protection schemes description",
           "mica:TokenValueProtectionSchemesDescriptionExplanatory", _TB),
    _field("G.16", "Compensation schemes", "mica:CompensationSchemesIndicator", _BOOL),
    _field("G.17", "Compensation schemes description",
           "mica:CompensationSchemesDescriptionExplanatory", _TB),
    _field("G.18", "Applicable law", "mica:ApplicableLawForRights", _STR),
    _field("G.19", "Competent court", "mica:CompetentCourtForRights", _STR),
)

# --------------------------------------------------------------------------- #
# Part H: underlying technology                                               #
# --------------------------------------------------------------------------- #

_PART_H = (
    _field("H.1", "Distributed ledger technology",
           "mica:DistributedLedgerTechnologyForOtherTokenExplanatory", _TB),
    _field("H.2", "Protocols and technical standards",
           "mica:ProtocolsAndTechnicalStandardsForOtherTokenExplanatory", _TB),
    _field("H.3", "Technology used", "mica:TechnologyUsedForOtherTokenExplanatory", _TB),
    _field("H.4", "Consensus mechanism", "mica:ConsensusMechanismForOtherTokenExplanatory", _TB),
    _field("H.5", "Incentive mechanisms and applicable fees",
           "mica:IncentiveMechanismsAndApplicableFeesForOtherTokenExplanatory", _TB),
    _field("H.6", "Use of distributed ledger technology",
           "mica:UseOfDistributedLedgerTechnologyIndicatorForOtherToken", _BOOL),
    _field("H.7", "Name of the distributed ledger", "mica:NameOfDistributedLedgerForOtherToken",
           _STR),
    _field("H.8", "Audit", "mica:AuditIndicatorForOtherToken", _BOOL),
    _field("H.9", "Audit outcome", "mica:AuditOutcomeForOtherTokenExplanatory", _TB),
)

# --------------------------------------------------------------------------- #
# Part I: risks                                                               #
# --------------------------------------------------------------------------- #

_PART_I = (
    _field("I.1", "Offer-related risks",
           "mica:DescriptionOfOfferrelatedRisksForOtherTokenExplanatory", _TB),
    _field("I.2", "Issuer-related risks",
           "mica:DescriptionOfIssuerrelatedRisksForOtherTokenExplanatory", _TB),
    _field("I.3", "Crypto-assets-related risks", "mica:OtherTokensrelatedRisksExplanatory", _TB),
    _field("I.4", "Project implementation-related risks",
           "mica:ProjectImplementationrelatedRisksExplanatory", _TB),
    _field("I.5", "Technology-related risks",
           "mica:DescriptionOfTechnologyrelatedRisksForOtherTokenExplanatory", _TB),
    _field("I.6", "Mitigation measures", "mica:MitigationMeasuresForOtherTokenExplanatory", _TB),
)

# --------------------------------------------------------------------------- #
# Part J and Annex: sustainability                                            #
# --------------------------------------------------------------------------- #

_PART_J = (
    _field(
        "J.1",
        "Adverse impacts on climate and other environment-related adverse impacts",
        "mica:InformationOnAdverseImpactsOnClimateAndOtherEnvironmentrelatedAdverseImpacts"
        "ForOtherTokenTokenExplanatory",
        _TB,
    ),
)

_SUSTAINABILITY_INDICATORS = (
    _field("S.1", "Name", "mica:NameOfCryptoAssetServiceProviderOrOfferor", _STR),
    _field("S.2", "Relevant legal entity identifier", "mica:RelevantLegalEntityIdentifier", _STR),
    _field("S.3", "Name of the crypto-asset", "mica:NameOfCryptoAssetForSustainability", _STR),
    _field("S.4", "Consensus mechanism", "mica:ConsensusMechanismSustainabilityExplanatory",
           _TB),
    _field("S.5", "Incentive mechanisms and applicable fees",
           "mica:IncentiveMechanismsSustainabilityExplanatory", _TB),
    _field("S.6", "Beginning of the period to which the disclosure relates",
           "mica:BeginningOfDisclosurePeriod", _DATE),
    _field("S.7", "End of the period to which the disclosure relates",
           "mica:EndOfDisclosurePeriod", _DATE),
    _field("S.8", "Energy consumption", "mica:EnergyConsumption", _DEC),
    _field("S.9", "Energy consumption sources and methodologies",
           "mica:EnergyConsumptionSourcesAndMethodologiesExplanatory", _TB),
    _field("S.10", "Renewable energy consumption", "mica:RenewableEnergyConsumptionPercentage",
           _PCT),
    _field("S.11", "Energy intensity", "mica:EnergyIntensity", _DEC),
    _field("S.12", "Scope 1 DLT GHG emissions - controlled",
           "mica:ScopeOneDLTGHGEmissionsControlled", _DEC),
    _field("S.13", "Scope 2 DLT GHG emissions - purchased",
           "mica:ScopeTwoDLTGHGEmissionsPurchased", _DEC),
    _field("S.14", "GHG intensity", "mica:GHGIntensity", _DEC),
    _field("S.15", "Key energy sources and methodologies",
           "mica:KeyEnergySourcesAndMethodologiesExplanatory", _TB),
    _field("S.16", "Key GHG sources and methodologies",
           "mica:KeyGHGSourcesAndMethodologiesExplanatory", _TB),
)

# --------------------------------------------------------------------------- #
# Indexes                                                                     #
# --------------------------------------------------------------------------- #

OTHR_FIELD_DEFINITIONS: Final[tuple[FieldDefinition, ...]] = (
    *_SUMMARY,
    *_PART_A,
    *_PART_B,
    *_PART_C,
    *_PART_D,
    *_PART_E,
    *_PART_F,
    *_PART_G,
    *_PART_H,
    *_PART_I,
    *_PART_J,
    *_SUSTAINABILITY_INDICATORS,
)

_BY_NUMBER: Final[Mapping[str, FieldDefinition]] = MappingProxyType(
    {f.number: f for f in OTHR_FIELD_DEFINITIONS}
)
_BY_ELEMENT: Final[Mapping[str, FieldDefinition]] = MappingProxyType(
    {f.element: f for f in OTHR_FIELD_DEFINITIONS}
)
_BY_SECTION: Final[Mapping[str, tuple[FieldDefinition, ...]]] = MappingProxyType(
    {key: tuple(f for f in OTHR_FIELD_DEFINITIONS if f.section == key) for key in SECTION_ORDER}
)
_SECTION_BY_KEY: Final[Mapping[str, SectionDefinition]] = MappingProxyType(
    {s.key: s for s in SECTIONS}
)


def get_field_by_number(number: str) -> FieldDefinition | None:
    """Return the field definition for a field number, if declared."""
    return _BY_NUMBER.get(number)


def get_field_by_element(element: str) -> FieldDefinition | None:
    """Return the field definition whose target element is ``element``."""
    return _BY_ELEMENT.get(element)


def get_fields_for_section(section: str) -> tuple[FieldDefinition, ...]:
    """Return the fields of a section in declaration order."""
    return _BY_SECTION.get(section, ())


def get_section(section: str) -> SectionDefinition | None:
    """Return the section definition for a section key."""
    return _SECTION_BY_KEY.get(section)


def section_title(section: str) -> str:
    """Return the display title of a section."""
    definition = _SECTION_BY_KEY.get(section)
    return definition.title if definition else f"Section {section}"


__all__ = [
    "OTHR_FIELD_DEFINITIONS",
    "SECTIONS",
    "SECTION_ORDER",
    "get_field_by_element",
    "get_field_by_number",
    "get_fields_for_section",
    "get_section",
    "section_title",
]
