from datetime import datetime
from io import BytesIO

import pandas as pd

from checkin.models.log_entry import Decision

PEOPLE_COLUMNS = ['Nombre', 'Email', 'Código', 'Estado', 'Fecha de registro']
LOG_COLUMNS = ['Nombre', 'Código', 'Estado', 'Fecha', 'Hora']
TEMPLATE_ROWS = [
    {'Nombre': 'Juan Pérez', 'Email': 'juan@ejemplo.com'},
    {'Nombre': 'María García', 'Email': 'maria@ejemplo.com'},
    {'Nombre': 'Carlos López', 'Email': ''},
]

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def export_people_frame(people):
    """One row per person: name, email, code, status and registration date."""
    data = [{
        'Nombre': person.name,
        'Email': person.email,
        'Código': person.code,
        'Estado': 'Activo' if person.active else 'Inactivo',
        'Fecha de registro': person.created_at.strftime('%Y-%m-%d')
    } for person in people]
    return pd.DataFrame(data, columns=PEOPLE_COLUMNS)


def export_log_frame(entries):
    """One row per log entry: name, code, decision label, date and time."""
    data = [{
        'Nombre': entry.person_name,
        'Código': entry.presented_code,
        'Estado': Decision.label(entry.decision),
        'Fecha': entry.timestamp.strftime('%Y-%m-%d'),
        'Hora': entry.timestamp.strftime('%H:%M:%S')
    } for entry in entries]
    return pd.DataFrame(data, columns=LOG_COLUMNS)


def _write_sheets(sheets):
    output = BytesIO()
    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        for sheet_name, df in sheets:
            df.to_excel(writer, sheet_name=sheet_name, index=False)

            # Set column widths to accommodate the content
            worksheet = writer.sheets[sheet_name]
            for i, col in enumerate(df.columns):
                longest = df[col].astype(str).map(len).max() if len(df) else 0
                worksheet.set_column(i, i, max(longest, len(col)) + 2)

    output.seek(0)
    return output.getvalue()


def export_to_excel(people, entries, now=None):
    """
    Export people and access log to a two-sheet workbook.

    Returns:
        tuple: (excel_data, filename)
    """
    now = now or datetime.now()
    data = _write_sheets([
        ('Usuarios', export_people_frame(people)),
        ('Historial', export_log_frame(entries)),
    ])
    filename = f"accesos-{now.strftime('%Y-%m-%d')}.xlsx"
    return data, filename


def export_to_json(people, entries, now=None):
    """
    Combined dump of both collections.

    Returns:
        tuple: (dict, filename)
    """
    now = now or datetime.now()
    data = {
        'users': [person.to_dict() for person in people],
        'accessLog': [entry.to_dict() for entry in entries],
        'exportDate': now.isoformat()
    }
    filename = f"accesos-{now.strftime('%Y-%m-%d')}.json"
    return data, filename


def build_import_template():
    """
    Example import file with the two required headers and sample rows.

    Returns:
        tuple: (excel_data, filename)
    """
    df = pd.DataFrame(TEMPLATE_ROWS, columns=['Nombre', 'Email'])
    return _write_sheets([('Usuarios', df)]), 'plantilla-usuarios.xlsx'
