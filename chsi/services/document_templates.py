"""
Section assemblers: one fixed legal template per document type.

Each assembler takes the untyped data record (plus an optional pinned date)
and returns the ordered node sequence of the document body. Wording follows
the standard forms used by private enforcement officers under the Law of the
Republic of Kazakhstan "On Enforcement Proceedings and the Status of
Enforcement Officers".
"""
from __future__ import annotations

from datetime import date
from typing import Any, List, Mapping, Optional

from chsi.services.document_builders import (
    blank,
    header,
    paragraph,
    property_table,
    signature,
)
from chsi.services.document_fields import (
    BankRequestFields,
    DebtorNoticeFields,
    PropertyInventoryFields,
    ResolutionFields,
)
from chsi.services.document_model import Alignment, StructuralNode

EXECUTOR = "Частный судебный исполнитель"
ENFORCEMENT_LAW = (
    '"Об исполнительном производстве и статусе судебных исполнителей"'
)


def _signature_block(executor_name: str) -> List[StructuralNode]:
    return [
        blank(),
        blank(),
        signature(EXECUTOR, executor_name),
        paragraph("М.П.", alignment=Alignment.START),
    ]


def build_resolution_initiation(
    data: Optional[Mapping[str, Any]],
    today: Optional[date] = None,
) -> List[StructuralNode]:
    """Постановление о возбуждении исполнительного производства."""
    f = ResolutionFields.from_data(data, today)

    nodes: List[StructuralNode] = [
        paragraph(f"г. {f.city}", alignment=Alignment.END),
        paragraph(f.date, alignment=Alignment.END),
        blank(),
        header("ПОСТАНОВЛЕНИЕ"),
        header("о возбуждении исполнительного производства"),
        blank(),
        paragraph(
            f"{EXECUTOR} {f.executor_name}, "
            f"исполнительный округ {f.district}, "
            f"рассмотрев исполнительный документ:"
        ),
        blank(),
        paragraph(
            f"Исполнительный лист № {f.exec_doc_number} "
            f"от {f.exec_doc_date} г., "
            f"выданный {f.court_name}"
        ),
        blank(),
        paragraph(f"Взыскатель: {f.creditor_name}"),
        paragraph(f"ИИН/БИН: {f.creditor_iin}"),
        paragraph(f"Адрес: {f.creditor_address}"),
        blank(),
        paragraph(f"Должник: {f.debtor_name}"),
        paragraph(f"ИИН/БИН: {f.debtor_iin}"),
        paragraph(f"Адрес: {f.debtor_address}"),
        blank(),
        paragraph(f"Предмет исполнения: {f.subject}"),
        paragraph(f"Сумма взыскания: {f.amount} тенге"),
        blank(),
        paragraph(
            "Руководствуясь статьями 9, 37 Закона Республики Казахстан "
            f"{ENFORCEMENT_LAW},"
        ),
        blank(),
        header("ПОСТАНОВЛЯЮ:"),
        blank(),
        paragraph(
            f"1. Возбудить исполнительное производство № {f.case_number} "
            f"о взыскании с {f.debtor_name} в пользу "
            f"{f.creditor_name} денежных средств в размере "
            f"{f.amount} тенге."
        ),
        blank(),
        paragraph(
            "2. Должнику в течение 5 (пяти) дней со дня получения настоящего постановления "
            "предлагается добровольно исполнить требования исполнительного документа."
        ),
        blank(),
        paragraph(
            "3. В случае неисполнения требований исполнительного документа в срок для "
            "добровольного исполнения, будут приняты меры принудительного исполнения, "
            "предусмотренные законодательством Республики Казахстан."
        ),
        blank(),
        paragraph(
            "4. Настоящее постановление может быть обжаловано в суд в течение 10 (десяти) дней "
            "со дня его получения."
        ),
    ]
    nodes.extend(_signature_block(f.executor_name))
    return nodes


def build_bank_request(
    data: Optional[Mapping[str, Any]],
    today: Optional[date] = None,
) -> List[StructuralNode]:
    """Запрос в банк о наличии счетов должника."""
    f = BankRequestFields.from_data(data, today)

    nodes: List[StructuralNode] = [
        paragraph(f"Исх. № {f.outgoing_number}", alignment=Alignment.START),
        paragraph(f"от {f.date}", alignment=Alignment.START),
        blank(),
        paragraph(f"В {f.bank_name}", alignment=Alignment.END),
        paragraph(f.bank_address, alignment=Alignment.END),
        blank(),
        header("ЗАПРОС"),
        header("о наличии банковских счетов"),
        blank(),
        paragraph(
            f"В производстве частного судебного исполнителя {f.executor_name} "
            f"находится исполнительное производство № {f.case_number} "
            f"о взыскании денежных средств с:"
        ),
        blank(),
        paragraph(f"Должник: {f.debtor_name}"),
        paragraph(f"ИИН/БИН: {f.debtor_iin}"),
        paragraph(f"Адрес: {f.debtor_address}"),
        blank(),
        paragraph(f"в пользу: {f.creditor_name}"),
        paragraph(f"Сумма взыскания: {f.amount} тенге"),
        blank(),
        paragraph(
            f"На основании статьи 64 Закона Республики Казахстан {ENFORCEMENT_LAW} "
            "прошу предоставить информацию:"
        ),
        blank(),
        paragraph("1. О наличии/отсутствии банковских счетов, открытых на имя вышеуказанного должника."),
        paragraph("2. О наличии денежных средств на указанных счетах и их размере."),
        paragraph("3. О движении денежных средств по счетам за последние 3 (три) месяца."),
        blank(),
        paragraph(
            "Ответ прошу направить в течение 3 (трех) рабочих дней по адресу: "
            f"{f.executor_address}"
        ),
        blank(),
        paragraph("Приложение: копия постановления о возбуждении исполнительного производства."),
    ]
    nodes.extend(_signature_block(f.executor_name))
    return nodes


def build_debtor_notice(
    data: Optional[Mapping[str, Any]],
    today: Optional[date] = None,
) -> List[StructuralNode]:
    """Уведомление должнику о возбуждении исполнительного производства."""
    f = DebtorNoticeFields.from_data(data, today)

    nodes: List[StructuralNode] = [
        paragraph(f"Исх. № {f.outgoing_number}", alignment=Alignment.START),
        paragraph(f"от {f.date}", alignment=Alignment.START),
        blank(),
        paragraph(f.debtor_name, alignment=Alignment.END),
        paragraph(f.debtor_address, alignment=Alignment.END),
        blank(),
        header("УВЕДОМЛЕНИЕ"),
        blank(),
        paragraph(f"Уважаемый(ая) {f.debtor_name}!"),
        blank(),
        paragraph(
            "Настоящим уведомляю Вас о том, что в производстве частного судебного исполнителя "
            f"{f.executor_name} находится исполнительное производство "
            f"№ {f.case_number}, возбужденное на основании исполнительного листа "
            f"№ {f.exec_doc_number} от {f.exec_doc_date} г., "
            f"выданного {f.court_name}."
        ),
        blank(),
        paragraph(f"Взыскатель: {f.creditor_name}"),
        paragraph(f"Предмет исполнения: {f.subject}"),
        paragraph(f"Сумма взыскания: {f.amount} тенге"),
        blank(),
        paragraph(
            f"В соответствии со статьей 37 Закона Республики Казахстан {ENFORCEMENT_LAW} "
            "Вам предоставляется срок для добровольного исполнения "
            "требований исполнительного документа - 5 (пять) дней со дня получения настоящего уведомления."
        ),
        blank(),
        paragraph(
            "В случае неисполнения требований исполнительного документа в установленный срок, "
            "к Вам будут применены меры принудительного исполнения, в том числе:"
        ),
        paragraph("- обращение взыскания на денежные средства и иное имущество;"),
        paragraph("- наложение ареста на имущество;"),
        paragraph("- ограничение права выезда за пределы Республики Казахстан;"),
        paragraph("- иные меры, предусмотренные законодательством."),
        blank(),
        paragraph(
            "Для решения вопросов по исполнительному производству Вы можете обратиться по адресу: "
            f"{f.executor_address}, тел.: {f.executor_phone}."
        ),
    ]
    nodes.extend(_signature_block(f.executor_name))
    return nodes


def build_property_inventory(
    data: Optional[Mapping[str, Any]],
    today: Optional[date] = None,
) -> List[StructuralNode]:
    """Акт описи имущества должника."""
    f = PropertyInventoryFields.from_data(data, today)

    return [
        paragraph(f"г. {f.city}", alignment=Alignment.END),
        paragraph(f.date, alignment=Alignment.END),
        blank(),
        header("АКТ"),
        header("описи имущества"),
        blank(),
        paragraph(
            f"{EXECUTOR} {f.executor_name}, "
            f"исполнительный округ {f.district}, "
            f"в рамках исполнительного производства № {f.case_number}"
        ),
        blank(),
        paragraph(f"Взыскатель: {f.creditor_name}"),
        paragraph(f"Должник: {f.debtor_name}"),
        paragraph(f"Сумма взыскания: {f.amount} тенге"),
        blank(),
        paragraph(f"произвел опись имущества должника по адресу: {f.inventory_address}"),
        blank(),
        paragraph("В присутствии понятых:", bold=True),
        paragraph(f"1. {f.witness1_name}, проживающий: {f.witness1_address}"),
        paragraph(f"2. {f.witness2_name}, проживающий: {f.witness2_address}"),
        blank(),
        paragraph("Описи подвергнуто следующее имущество:", bold=True),
        blank(),
        property_table(f.property_items),
        blank(),
        paragraph(f"Имущество оставлено на ответственное хранение: {f.storage_responsible}"),
        paragraph(
            "Хранителю разъяснена ответственность за сохранность имущества, предусмотренная "
            "статьей 360 Уголовного кодекса Республики Казахстан."
        ),
        blank(),
        paragraph(f"Замечания и заявления участников: {f.remarks}"),
        blank(),
        paragraph("Подписи:", bold=True),
        blank(),
        signature(EXECUTOR, f.executor_name),
        blank(),
        signature("Понятой 1", f.witness1_name),
        blank(),
        signature("Понятой 2", f.witness2_name),
        blank(),
        signature("Должник", f.debtor_name),
        blank(),
        signature("Хранитель", f.storage_responsible),
    ]
