"""ViewModel package for survey UI state and command surfaces.

Call context:
    ``surveyapp/app/main.py`` builds a :class:`~surveyapp.viewmodels.survey_vm.SurveyVM`
    and views subscribe to its ``ui_state`` observable.

Dependencies:
    Modules in this package depend on domain types, use cases, and lightweight
    formatting helpers only. I/O adapters remain outside.

Responsibilities:
    - Expose observable UI state and command intent methods.
    - Project domain surveys into view-facing question states.
    - Keep MVVM boundaries explicit by avoiding transport or persistence logic.
"""
