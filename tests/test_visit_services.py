from clinic_records.services import ErrorKind


class TestListPatients:
    def test_one_entry_per_identity_with_visit_count(self, queries, make_visit):
        make_visit(visitDate='2024-01-01T09:00:00')
        make_visit(visitDate='2024-02-01T09:00:00')
        make_visit(name='Ravi Kumar', phone='9123456780')

        patients = queries.list_patients().value
        counts = {(p['name'], p['phone']): p['totalVisits'] for p in patients}
        assert counts == {('Asha Rao', '9876543210'): 2, ('Ravi Kumar', '9123456780'): 1}

    def test_representative_is_latest_visit(self, queries, make_visit):
        make_visit(visitDate='2024-02-01T09:00:00', condition='Cough', age=40)
        make_visit(visitDate='2024-06-01T09:00:00', condition='Recovered', age=41)
        make_visit(visitDate='2024-04-01T09:00:00', condition='Fever', age=40)

        [patient] = queries.list_patients().value
        assert patient['visitDate'] == '2024-06-01T09:00:00'
        assert patient['condition'] == 'Recovered'
        assert patient['age'] == 41
        assert patient['totalVisits'] == 3

    def test_empty_store(self, queries):
        assert queries.list_patients().value == []


class TestVisitLookups:
    def test_get_visit(self, queries, make_visit):
        visit = make_visit()
        assert queries.get_visit(visit.id).value['id'] == visit.id
        assert queries.get_visit(visit.id + 1).error.kind == ErrorKind.NOT_FOUND

    def test_visit_history_latest_first(self, queries, make_visit):
        make_visit(visitDate='2024-01-01T09:00:00')
        make_visit(visitDate='2024-02-01T09:00:00')

        history = queries.list_visits_for_identity('Asha Rao', '9876543210').value
        assert [v['visitDate'] for v in history] == ['2024-02-01T09:00:00', '2024-01-01T09:00:00']

    def test_visit_history_unknown_identity_is_empty(self, queries):
        result = queries.list_visits_for_identity('Nobody', '0000000000')
        assert result.ok and result.value == []


class TestAppointmentsOnDate:
    def test_includes_both_boundaries_in_visit_order(self, queries, make_visit):
        make_visit(visitDate='2024-05-20T11:00:00', followUpDate='2024-06-01T23:59:59.999')
        make_visit(visitDate='2024-05-10T11:00:00', followUpDate='2024-06-01T00:00:00')
        make_visit(visitDate='2024-05-15T11:00:00', followUpDate='2024-06-01T14:30:00')
        make_visit(visitDate='2024-05-01T11:00:00', followUpDate='2024-05-31T23:59:59.999')
        make_visit(visitDate='2024-05-02T11:00:00', followUpDate='2024-06-02T00:00:00')

        appointments = queries.list_appointments_on_date('2024-06-01').value
        assert [a['followUpDate'] for a in appointments] == [
            '2024-06-01T00:00:00',
            '2024-06-01T14:30:00',
            '2024-06-01T23:59:59.999000',
        ]

    def test_invalid_date(self, queries):
        result = queries.list_appointments_on_date('someday')
        assert result.error.kind == ErrorKind.INVALID_DATE


class TestAnalytics:
    def test_single_day_range(self, queries, make_visit):
        make_visit(visitDate='2024-05-09T10:00:00', amountPaid=100)
        make_visit(visitDate='2024-05-10T10:00:00', amountPaid=200)
        make_visit(visitDate='2024-05-11T10:00:00', amountPaid=300)

        totals = queries.get_analytics('2024-05-10', '2024-05-10').value
        assert totals == {'totalVisits': 1, 'totalFees': 200, 'totalUniquePatients': 1}

    def test_range_end_covers_the_whole_last_day(self, queries, make_visit):
        make_visit(visitDate='2024-05-10T00:00:00', amountPaid=50)
        make_visit(visitDate='2024-05-12T23:59:59.999', amountPaid=70)
        make_visit(visitDate='2024-05-13T00:00:00', amountPaid=1000)

        totals = queries.get_analytics('2024-05-10', '2024-05-12').value
        assert totals['totalVisits'] == 2
        assert totals['totalFees'] == 120

    def test_missing_amounts_count_as_zero(self, queries, make_visit):
        make_visit(visitDate='2024-05-10T10:00:00')
        totals = queries.get_analytics('2024-05-10', '2024-05-10').value
        assert totals == {'totalVisits': 1, 'totalFees': 0, 'totalUniquePatients': 1}

    def test_unique_patients_are_counted_by_phone_only(self, queries, make_visit):
        # Two identities sharing one phone count as a single unique patient,
        # even though list_patients reports them separately.
        make_visit(name='Asha Rao', visitDate='2024-05-10T09:00:00')
        make_visit(name='Meera Rao', visitDate='2024-05-10T11:00:00')
        make_visit(name='Asha Rao', visitDate='2024-05-10T15:00:00')

        totals = queries.get_analytics('2024-05-10', '2024-05-10').value
        assert totals['totalVisits'] == 3
        assert totals['totalUniquePatients'] == 1
        assert len(queries.list_patients().value) == 2

    def test_missing_bound(self, queries):
        assert queries.get_analytics('2024-05-10', None).error.kind == ErrorKind.INVALID_RANGE
        assert queries.get_analytics('', '2024-05-10').error.kind == ErrorKind.INVALID_RANGE

    def test_unparseable_bound(self, queries):
        assert queries.get_analytics('2024-05-10', 'tomorrow').error.kind == ErrorKind.INVALID_RANGE


class TestMutations:
    def test_add_visit_returns_serialized_visit(self, mutations):
        result = mutations.add_visit({'name': 'Asha Rao', 'phone': '9876543210', 'gender': 'Female'})
        assert result.ok
        assert result.value['gender'] == 'Female'
        assert result.value['id'] is not None

    def test_add_duplicate_visit(self, mutations, make_visit):
        make_visit()
        result = mutations.add_visit({'name': 'Asha Rao', 'phone': '9876543210', 'visitDate': '2024-05-10T10:00:00'})
        assert result.error.kind == ErrorKind.DUPLICATE_VISIT

    def test_update_visit(self, mutations, make_visit):
        visit = make_visit()
        result = mutations.update_visit(visit.id, {'treatment': 'Rest'})
        assert result.value['treatment'] == 'Rest'

    def test_update_demographics_requires_all_inputs(self, mutations):
        for args in [(None, '9876543210', {'age': 30}), ('Asha Rao', '', {'age': 30}), ('Asha Rao', '9876543210', None)]:
            assert mutations.update_demographics(*args).error.kind == ErrorKind.MISSING_INPUT

    def test_update_demographics_renames_every_visit(self, mutations, queries, make_visit):
        make_visit(visitDate='2024-01-01T09:00:00')
        make_visit(visitDate='2024-02-01T09:00:00')

        result = mutations.update_demographics('Asha Rao', '9876543210', {'name': 'Asha R. Rao', 'age': 35})
        assert result.value == {'matched': 2, 'modified': 2}

        assert queries.list_visits_for_identity('Asha Rao', '9876543210').value == []
        renamed = queries.list_visits_for_identity('Asha R. Rao', '9876543210').value
        assert len(renamed) == 2
        assert {v['age'] for v in renamed} == {35}

    def test_update_demographics_unknown_identity(self, mutations):
        result = mutations.update_demographics('Nobody', '0000000000', {'age': 30})
        assert result.error.kind == ErrorKind.NOTHING_MATCHED

    def test_delete_identity_then_repeat(self, mutations, queries, make_visit):
        make_visit()
        make_visit(name='Ravi Kumar', phone='9123456780')

        assert mutations.delete_identity('Asha Rao', '9876543210').value == 1
        assert [p['name'] for p in queries.list_patients().value] == ['Ravi Kumar']
        assert mutations.delete_identity('Asha Rao', '9876543210').error.kind == ErrorKind.NOTHING_MATCHED
