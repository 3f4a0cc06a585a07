"""Message templates for hypertension alerts (Spanish, es-AR)."""

# Patient alert, direct practitioner fan-out mode
PATIENT_ALERT = """🚨 ALERTA PRESIÓN ARTERIAL ELEVADA

Paciente: {patient_name}
Presión Arterial: {systolic}/{diastolic} mmHg

⚠️ Valores por encima del rango normal:
- Sistólica: {systolic_status}
- Diastólica: {diastolic_status}

📋 Recomendaciones inmediatas:
- Repetir medición en 15 minutos
- Verificar técnica de medición correcta
- Contactar al equipo médico si persiste elevada
- Revisar medicación antihipertensiva actual

Fecha: {date}
Plataforma: EPA Bienestar IA"""

# Patient alert, email mode (doctor has been notified)
PATIENT_ALERT_EMAIL_MODE = """🚨 ALERTA PRESIÓN ARTERIAL ELEVADA

Estimado/a {patient_name},

Se ha detectado que su última medición de presión arterial presenta valores elevados:

📊 MEDICIÓN ACTUAL:
- Presión Sistólica: {systolic} mmHg {systolic_note}
- Presión Diastólica: {diastolic} mmHg {diastolic_note}

⚠️ IMPORTANTE:
Su médico de cabecera ha sido notificado automáticamente de estos valores.

📋 RECOMENDACIONES INMEDIATAS:
- Repita la medición en 15 minutos en reposo
- Verifique que esté tomando su medicación según indicación médica
- Evite actividad física intensa por el momento
- Si presenta síntomas como dolor de cabeza, mareos o dolor en el pecho, busque atención médica inmediata

📞 En caso de emergencia, no dude en contactar a su médico o dirigirse al centro de salud más cercano.

💙 EPA Bienestar IA - Cuidando su salud cardiovascular
Fecha: {date}"""

PRACTITIONER_ALERT = (
    "Paciente {patient_given} presenta presión arterial elevada: "
    "{systolic}/{diastolic} mmHg. Requiere evaluación médica."
)

DOCTOR_NOTIFICATION = (
    "Email enviado al Dr./Dra. {doctor_given} {doctor_family} notificando presión arterial "
    "elevada del paciente {patient_given} {patient_family}: {systolic}/{diastolic} mmHg"
)

DOCTOR_EMAIL_SUBJECT = "🚨 EPA Bienestar IA - Alerta HTA: {patient_given} {patient_family}"

DOCTOR_EMAIL_HTML = """
<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .header {{ background-color: #dc3545; color: white; padding: 20px; text-align: center; }}
    .content {{ padding: 20px; }}
    .alert-box {{ background-color: #fff3cd; border: 1px solid #ffeaa7; padding: 15px; margin: 20px 0; border-radius: 5px; }}
    .values {{ background-color: #f8f9fa; padding: 15px; margin: 10px 0; border-radius: 5px; }}
    .footer {{ background-color: #6c757d; color: white; padding: 15px; text-align: center; font-size: 12px; }}
    .btn {{ background-color: #007bff; color: white; padding: 10px 20px; text-decoration: none; border-radius: 5px; display: inline-block; margin: 10px 0; }}
  </style>
</head>
<body>
  <div class="header">
    <h1>🚨 ALERTA - PRESIÓN ARTERIAL ELEVADA</h1>
    <p>EPA Bienestar IA - Sistema de Monitoreo Cardiovascular</p>
  </div>

  <div class="content">
    <h2>Estimado/a Dr./Dra. {doctor_name},</h2>

    <div class="alert-box">
      <strong>⚠️ Su paciente {patient_name} presenta valores elevados de presión arterial que requieren su atención inmediata.</strong>
    </div>

    <h3>📊 Detalles de la Medición:</h3>
    <div class="values">
      <p><strong>Paciente:</strong> {patient_name}</p>
      <p><strong>Fecha y Hora:</strong> {measurement_date}</p>
      <p><strong>Presión Arterial:</strong> {systolic}/{diastolic} mmHg</p>
      <p><strong>Estado:</strong>
        {systolic_status}<br>
        {diastolic_status}
      </p>
    </div>

    <h3>🎯 Recomendaciones Clínicas:</h3>
    <ul>
      <li>Verificar adherencia al tratamiento antihipertensivo actual</li>
      <li>Evaluar necesidad de ajuste de medicación</li>
      <li>Considerar medición ambulatoria de presión arterial (MAPA)</li>
      <li>Revisar factores de riesgo cardiovascular</li>
      <li>Programar consulta de seguimiento si no está ya programada</li>
    </ul>

    <p>
      <a href="{observation_url}" class="btn">
        Ver Detalles Completos en EPA Bienestar IA
      </a>
    </p>

    <div class="alert-box">
      <strong>📞 Contacto de Emergencia:</strong><br>
      Si considera que este caso requiere atención inmediata, puede contactar al paciente o derivar a emergencias según su criterio clínico.
    </div>
  </div>

  <div class="footer">
    <p>Este mensaje fue generado automáticamente por EPA Bienestar IA</p>
    <p>Sistema de Monitoreo Cardiovascular - cardio.epa-bienestar.com.ar</p>
    <p>Para soporte técnico: {admin_email}</p>
  </div>
</body>
</html>
"""

DOCTOR_EMAIL_TEXT = """
🚨 ALERTA - PRESIÓN ARTERIAL ELEVADA
EPA Bienestar IA - Sistema de Monitoreo Cardiovascular

Estimado/a Dr./Dra. {doctor_name},

Su paciente {patient_name} presenta valores elevados de presión arterial que requieren su atención.

DETALLES DE LA MEDICIÓN:
- Paciente: {patient_name}
- Fecha y Hora: {measurement_date}
- Presión Arterial: {systolic}/{diastolic} mmHg
- Estado: {overall_status}

VALORES ESPECÍFICOS:
- Sistólica: {systolic} mmHg {systolic_label}
- Diastólica: {diastolic} mmHg {diastolic_label}

RECOMENDACIONES:
- Verificar adherencia al tratamiento
- Evaluar ajuste de medicación
- Considerar MAPA si es necesario
- Programar seguimiento

Ver detalles completos: {observation_url}

Este mensaje fue generado automáticamente por EPA Bienestar IA
Para soporte: {admin_email}
"""

ADMIN_FALLBACK_SUBJECT = "🚨 EPA Bienestar IA - Paciente sin médico asignado con HTA: {patient_given}"

ADMIN_FALLBACK_TEXT = (
    "ALERTA: El paciente {patient_given} {patient_family} presenta presión arterial elevada "
    "({systolic}/{diastolic} mmHg) pero no tiene médico de cabecera asignado. "
    "Requiere atención administrativa."
)
