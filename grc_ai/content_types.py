# grc_ai/content_types.py

"""
Closed enumeration of the content a generation request can ask for.
"""

from enum import Enum


class ContentType(str, Enum):
    """Content-type tags, grouped by GRC category."""

    # Audit planning and reporting
    DESCRIPTION = "description"
    OBJECTIVES = "objectives"
    SCOPE = "scope"
    METHODOLOGY = "methodology"
    EXECUTIVE_SUMMARY = "executive_summary"

    # Controls
    CONTROL_SET_DESCRIPTION = "control_set_description"
    CONTROL_GENERATION = "control_generation"
    COMPLIANCE_MAPPING = "compliance_mapping"
    RISK_CONTROL_MATRIX = "risk_control_matrix"

    # Privacy
    DPIA_DESCRIPTION = "dpia_description"
    DPIA_RISK_ASSESSMENT = "dpia_risk_assessment"
    ROPA_PURPOSE = "ropa_purpose"
    ROPA_LEGAL_BASIS = "ropa_legal_basis"

    # Policy
    POLICY_CONTENT = "policy_content"
    POLICY_TITLE = "policy_title"
    POLICY_DESCRIPTION = "policy_description"
    POLICY_SCOPE = "policy_scope"
    POLICY_VERSION_SUMMARY = "policy_version_summary"
    POLICY_TEMPLATE = "policy_template"

    # Incident and ESG
    INCIDENT_RESPONSE = "incident_response"
    ESG_PROGRAM = "esg_program"

    # Business continuity
    BCP_PLAN = "bcp_plan"
    BCP_DESCRIPTION = "bcp_description"
    BCP_SCOPE = "bcp_scope"
    BCP_BUSINESS_IMPACT_ANALYSIS = "bcp_business_impact_analysis"
    BCP_RISK_ASSESSMENT = "bcp_risk_assessment"
    BCP_RECOVERY_STRATEGIES = "bcp_recovery_strategies"
    BCP_RESOURCE_REQUIREMENTS = "bcp_resource_requirements"
    BCP_COMMUNICATION_PLAN = "bcp_communication_plan"
    BCP_TESTING_SCHEDULE = "bcp_testing_schedule"
    BCP_MAINTENANCE_SCHEDULE = "bcp_maintenance_schedule"
    BCP_CRITICAL_FUNCTION_DESCRIPTION = "bcp_critical_function_description"
    BCP_RECOVERY_STRATEGY = "bcp_recovery_strategy"
    BCP_TESTING_SCENARIO = "bcp_testing_scenario"

    # Vendor risk
    VENDOR_ASSESSMENT = "vendor_assessment"
    VENDOR_DUE_DILIGENCE_REPORT = "vendor_due_diligence_report"
    VENDOR_CONTRACT_RISK_ANALYSIS = "vendor_contract_risk_analysis"
    VENDOR_RISK_SCORING = "vendor_risk_scoring"
    VENDOR_ASSESSMENT_CRITERIA = "vendor_assessment_criteria"
    VENDOR_MONITORING_PLAN = "vendor_monitoring_plan"
    VENDOR_INCIDENT_RESPONSE = "vendor_incident_response"
    VENDOR_PERFORMANCE_EVALUATION = "vendor_performance_evaluation"
    VENDOR_COMPLIANCE_ASSESSMENT = "vendor_compliance_assessment"
    VENDOR_FINANCIAL_ANALYSIS = "vendor_financial_analysis"
    VENDOR_SECURITY_ASSESSMENT = "vendor_security_assessment"
    VENDOR_OPERATIONAL_ASSESSMENT = "vendor_operational_assessment"

    # IT security
    SECURITY_POLICY = "security_policy"
    VULNERABILITY_ASSESSMENT_REPORT = "vulnerability_assessment_report"
    SECURITY_INCIDENT_RESPONSE_PLAN = "security_incident_response_plan"
    SECURITY_CONTROLS_MAPPING = "security_controls_mapping"
    SECURITY_FRAMEWORK_COMPLIANCE = "security_framework_compliance"
    SECURITY_POLICY_DESCRIPTION = "security_policy_description"
    SECURITY_POLICY_SCOPE = "security_policy_scope"
    SECURITY_POLICY_PROCEDURES = "security_policy_procedures"
    SECURITY_POLICY_ROLES = "security_policy_roles"
    SECURITY_POLICY_INCIDENT_RESPONSE = "security_policy_incident_response"
    SECURITY_POLICY_ACCESS_CONTROL = "security_policy_access_control"
    SECURITY_POLICY_DATA_PROTECTION = "security_policy_data_protection"

    # Training
    TRAINING_PROGRAM = "training_program"
    TRAINING_DESCRIPTION = "training_description"
    LEARNING_OBJECTIVES = "learning_objectives"
    ASSESSMENT_CRITERIA = "assessment_criteria"
    TRAINING_MATERIALS = "training_materials"
    TRAINING_SCHEDULE = "training_schedule"
    CERTIFICATION_REQUIREMENTS = "certification_requirements"
    TRAINING_EVALUATION = "training_evaluation"
    COMPETENCY_MAPPING = "competency_mapping"
    TRAINING_EFFECTIVENESS = "training_effectiveness"
    COMPLIANCE_TRAINING = "compliance_training"
    SKILL_DEVELOPMENT_PLAN = "skill_development_plan"

    # Findings
    FINDING_DESCRIPTION = "finding_description"
    FINDING_ANALYSIS = "finding_analysis"
    FINDING_IMPACT = "finding_impact"
    FINDING_RECOMMENDATIONS = "finding_recommendations"
    FINDING_ACTION_PLAN = "finding_action_plan"
    FINDING_RISK_ASSESSMENT = "finding_risk_assessment"
    FINDING_ROOT_CAUSE = "finding_root_cause"
    FINDING_EVIDENCE = "finding_evidence"
    FINDING_PRIORITY = "finding_priority"
    FINDING_TIMELINE = "finding_timeline"
    FINDING_ASSIGNEE = "finding_assignee"
    FINDING_FOLLOW_UP = "finding_follow_up"

    # Resilience
    RESILIENCE_ASSESSMENT = "resilience_assessment"
    RESILIENCE_STRATEGY = "resilience_strategy"
    CRISIS_MANAGEMENT_PLAN = "crisis_management_plan"
    BUSINESS_IMPACT_ANALYSIS = "business_impact_analysis"
    RECOVERY_STRATEGIES = "recovery_strategies"
    RESILIENCE_METRICS = "resilience_metrics"
    SCENARIO_ANALYSIS = "scenario_analysis"
    RESILIENCE_FRAMEWORK = "resilience_framework"
    CAPACITY_ASSESSMENT = "capacity_assessment"
    ADAPTABILITY_PLAN = "adaptability_plan"
    RESILIENCE_MONITORING = "resilience_monitoring"
    CONTINUOUS_IMPROVEMENT = "continuous_improvement"

    # Supply chain
    SUPPLY_CHAIN_RISK = "supply_chain_risk"
    SUPPLY_CHAIN_RISK_ASSESSMENT = "supply_chain_risk_assessment"
    VENDOR_EVALUATION_CRITERIA = "vendor_evaluation_criteria"
    RISK_MITIGATION_STRATEGIES = "risk_mitigation_strategies"
    SUPPLY_CHAIN_MAPPING = "supply_chain_mapping"
    VENDOR_TIER_CLASSIFICATION = "vendor_tier_classification"
    RISK_PROPAGATION_ANALYSIS = "risk_propagation_analysis"
    SUPPLY_CHAIN_RESILIENCE_SCORING = "supply_chain_resilience_scoring"
    DISRUPTION_RESPONSE_PLAN = "disruption_response_plan"
    SUPPLIER_DEVELOPMENT_PROGRAM = "supplier_development_program"
    PERFORMANCE_MONITORING_FRAMEWORK = "performance_monitoring_framework"
    COMPLIANCE_ASSESSMENT_CRITERIA = "compliance_assessment_criteria"
    FINANCIAL_STABILITY_ANALYSIS = "financial_stability_analysis"

    # Report building
    CHART_DATA = "chart_data"
    TABLE_DATA = "table_data"
    CONTROL_EVALUATION = "control_evaluation"


class AuditType(str, Enum):
    """Audit categories that shape objectives guidance."""
    INTERNAL = "internal"
    EXTERNAL = "external"
    COMPLIANCE = "compliance"
    OPERATIONAL = "operational"
    FINANCIAL = "financial"
    IT = "it"
    QUALITY = "quality"
    ENVIRONMENTAL = "environmental"


# Content types whose prompt asks for a JSON array of strings
ARRAY_CONTENT_TYPES = frozenset({
    ContentType.OBJECTIVES.value,
    ContentType.LEARNING_OBJECTIVES.value,
})
